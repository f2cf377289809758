"""
Base models and mixins for the database
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base

from turnos.domain.time_utils import utc_now_iso

Base = declarative_base()


class TimestampMixin:
    """Mixin para agregar timestamps ISO-8601 (UTC) como texto."""

    created_at = Column(String(32), default=utc_now_iso, nullable=False)
    updated_at = Column(String(32), nullable=True)
