"""
CourseDesk Backend — Student SQLAlchemy Model
===============================================

What:  ORM model representing the `students` table.
Why:   Maps Student records to rows; the unique index on `email` keeps one
       record per address.

Design notes:
    - `course` holds the course *name* as plain text. There is no foreign key:
      deleting or renaming a course leaves students untouched.
    - The created_at DESC index serves the default listing (newest first).
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from coursedesk.database import Base
from coursedesk.models.columns import UTCDateTime, utcnow


class Student(Base):
    """A student record."""

    __tablename__ = "students"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        comment="Contact email, unique across all students",
    )

    course: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
        default=None,
        comment="Name of the course the student is enrolled in",
    )

    enrollment_date: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        comment="active | graduated | inactive",
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
        Index("idx_students_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, email='{self.email}', status='{self.status}')>"
