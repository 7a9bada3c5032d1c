"""Survey Creation — persists a survey and its ranked questions inside a unit of work.

Invariants:
    - Shape validated by core/enforce_survey.py before any row is written
    - Exactly 1 + N rows: the survey, then one question per payload item
    - rank == 1-based payload position
"""

import logging
from collections.abc import Mapping
from datetime import datetime

from courier.core.build_records import build_survey, build_survey_questions
from courier.core.domain_types import SurveyId
from courier.core.enforce_survey import validate_survey_payload
from courier.core.repository_protocols import UnitOfWork

logger = logging.getLogger(__name__)


async def create_survey(
    uow: UnitOfWork, survey_payload: Mapping, now: datetime,
) -> SurveyId:
    """Validate, then write survey + questions. Returns the survey id."""
    title, questions = validate_survey_payload(survey_payload)
    survey = build_survey(title, now)
    await uow.surveys.add_survey(
        survey, build_survey_questions(survey.id, questions),
    )
    logger.info(
        f"Survey created with {len(questions)} question(s)",
        extra={"survey_id": survey.id},
    )
    return survey.id
