"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Message is the aggregate root of an authoring request; requests and deliveries
      are scoped by message_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from courier.models.author import Author  # noqa: F401
from courier.models.message import Message  # noqa: F401
from courier.models.message_request import MessageRequest  # noqa: F401
from courier.models.message_delivery import MessageDelivery  # noqa: F401
from courier.models.survey import Survey  # noqa: F401
from courier.models.survey_question import SurveyQuestion  # noqa: F401
