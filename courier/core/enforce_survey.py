"""Survey Shape Enforcement — the last check before a survey reaches the database.

Invariants:
    - validate_survey_payload is PURE and raises InvalidSurveyShapeError on the first violation
    - questions must be a list (not absent, not a mapping) of at most MAX_SURVEY_QUESTIONS
    - every question has a non-empty prompt and a non-empty list of string choices
    - Returned questions keep payload order; rank is assigned from that order

Design Decisions:
    - Duplicated from the Pydantic schema on purpose: the core must never persist a
      malformed survey, whichever entry point built the payload
"""

from collections.abc import Mapping

from courier.core.errors import InvalidSurveyShapeError

MAX_SURVEY_QUESTIONS: int = 3


def _check_question(index: int, question: object) -> dict:
    where = f"survey.questions[{index}]"
    if not isinstance(question, Mapping):
        raise InvalidSurveyShapeError(f"{where} must be an object", where)

    prompt = question.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        raise InvalidSurveyShapeError(
            f"{where}.prompt is required", f"{where}.prompt",
        )

    choices = question.get("choices")
    if not isinstance(choices, list) or not choices:
        raise InvalidSurveyShapeError(
            f"{where}.choices must be a non-empty array", f"{where}.choices",
        )
    if not all(isinstance(c, str) for c in choices):
        raise InvalidSurveyShapeError(
            f"{where}.choices must contain only strings", f"{where}.choices",
        )
    return {"prompt": prompt, "choices": list(choices)}


def validate_survey_payload(survey: object) -> tuple[str, list[dict]]:
    """Return (title, questions) or raise InvalidSurveyShapeError."""
    if not isinstance(survey, Mapping):
        raise InvalidSurveyShapeError("survey must be an object")

    title = survey.get("title")
    if not isinstance(title, str) or not title.strip():
        raise InvalidSurveyShapeError("survey.title is required", "survey.title")

    questions = survey.get("questions")
    if questions is None:
        raise InvalidSurveyShapeError(
            "survey.questions is required", "survey.questions",
        )
    if not isinstance(questions, list):
        raise InvalidSurveyShapeError(
            "survey.questions must be an array", "survey.questions",
        )
    if len(questions) > MAX_SURVEY_QUESTIONS:
        raise InvalidSurveyShapeError(
            f"survey.questions must not contain more than "
            f"{MAX_SURVEY_QUESTIONS} items (got {len(questions)})",
            "survey.questions",
        )

    return title, [_check_question(i, q) for i, q in enumerate(questions)]
