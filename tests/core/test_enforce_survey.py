"""Survey Shape Enforcement — verifies the checks run before a survey is persisted.

Tests:
    - Valid payload returns title and questions in payload order
    - More than MAX_SURVEY_QUESTIONS questions rejected
    - Missing or non-list questions rejected
    - Questions need a prompt and non-empty string choices
"""

import pytest

from courier.core.enforce_survey import MAX_SURVEY_QUESTIONS, validate_survey_payload
from courier.core.errors import InvalidSurveyShapeError


def _question(prompt="Which day?", choices=None):
    return {"prompt": prompt, "choices": choices or ["Mon", "Tue"]}


def test_max_questions_is_three():
    assert MAX_SURVEY_QUESTIONS == 3


def test_valid_payload_returns_title_and_questions():
    title, questions = validate_survey_payload({
        "title": "Planting",
        "questions": [_question("First?"), _question("Second?", ["a", "b", "c"])],
    })
    assert title == "Planting"
    assert [q["prompt"] for q in questions] == ["First?", "Second?"]
    assert questions[1]["choices"] == ["a", "b", "c"]


def test_three_questions_allowed():
    _, questions = validate_survey_payload({
        "title": "T", "questions": [_question() for _ in range(3)],
    })
    assert len(questions) == 3


def test_four_questions_rejected():
    with pytest.raises(InvalidSurveyShapeError, match="more than 3"):
        validate_survey_payload({
            "title": "T", "questions": [_question() for _ in range(4)],
        })


def test_empty_question_list_allowed():
    _, questions = validate_survey_payload({"title": "T", "questions": []})
    assert questions == []


def test_missing_questions_rejected():
    with pytest.raises(InvalidSurveyShapeError) as exc:
        validate_survey_payload({"title": "T"})
    assert exc.value.field == "survey.questions"


def test_mapping_questions_rejected():
    with pytest.raises(InvalidSurveyShapeError, match="must be an array"):
        validate_survey_payload({"title": "T", "questions": {"0": _question()}})


def test_non_mapping_survey_rejected():
    with pytest.raises(InvalidSurveyShapeError):
        validate_survey_payload(["not", "an", "object"])


def test_blank_title_rejected():
    with pytest.raises(InvalidSurveyShapeError, match="title"):
        validate_survey_payload({"title": "  ", "questions": []})


def test_question_without_prompt_rejected():
    with pytest.raises(InvalidSurveyShapeError) as exc:
        validate_survey_payload({
            "title": "T", "questions": [{"choices": ["a"]}],
        })
    assert exc.value.field == "survey.questions[0].prompt"


def test_empty_choices_rejected():
    with pytest.raises(InvalidSurveyShapeError, match="non-empty array"):
        validate_survey_payload({
            "title": "T", "questions": [{"prompt": "P", "choices": []}],
        })


def test_non_string_choice_rejected():
    with pytest.raises(InvalidSurveyShapeError, match="only strings"):
        validate_survey_payload({
            "title": "T", "questions": [{"prompt": "P", "choices": ["a", 2]}],
        })
