"""
CourseDesk Backend — Course SQLAlchemy Model
==============================================

What:  ORM model representing the `courses` table.
Why:   Maps Course records to rows; the unique index on `name` is the
       persistence-level guarantee that no two courses share a name.
Who:   Used by CourseService for CRUD and DashboardService for counts.

Table Design Rationale:
    - UUID primary key generated in Python so the id is known right after flush
    - name: UNIQUE; a duplicate insert raises IntegrityError, mapped to a conflict
    - duration: integer, CHECK duration >= 1
    - status: short enum-like string ('active' | 'inactive')
    - created_at / updated_at: UTC, maintained by Python-side defaults so the
      values are available on the instance without a refresh
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from coursedesk.database import Base
from coursedesk.models.columns import UTCDateTime, utcnow


class Course(Base):
    """A course students can be enrolled in."""

    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        unique=True,
        comment="Course name, unique across all courses",
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    # Length of the course; the unit is left to the client (weeks, months)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        comment="active | inactive",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        CheckConstraint("duration >= 1", name="ck_courses_duration_positive"),
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, name='{self.name}', status='{self.status}')>"
