"""
CourseDesk Backend — Student Request/Response Schemas
=======================================================

What:  Pydantic models defining the Student API contract.
How:   Same conventions as schemas/course.py: snake_case attributes,
       camelCase JSON (enrollmentDate, createdAt, updatedAt).

`course` carries a course name. It is not checked against the courses table.
Enrollment dates are converted to UTC on input; a value without an offset is
taken to be UTC already.
"""

import enum
import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from coursedesk.models.columns import as_utc
from coursedesk.schemas.common import API_MODEL_CONFIG


class StudentStatus(str, enum.Enum):
    ACTIVE = "active"
    GRADUATED = "graduated"
    INACTIVE = "inactive"


class StudentCreate(BaseModel):
    """
    Body of POST /api/students.

    enrollment_date may be omitted; the service fills in the current time.
    """

    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=1, max_length=320, description="Unique email address")
    course: Optional[str] = Field(default=None, max_length=200, description="Course name")
    enrollment_date: Optional[datetime] = None
    status: StudentStatus = Field(default=StudentStatus.ACTIVE, validate_default=True)

    model_config = {**API_MODEL_CONFIG, "use_enum_values": True}

    @field_validator("enrollment_date")
    @classmethod
    def normalize_enrollment_date(cls, v):
        return as_utc(v)


class StudentUpdate(BaseModel):
    """Body of PUT /api/students/{id}; partial merge, see CourseUpdate."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    email: Optional[str] = Field(default=None, min_length=1, max_length=320)
    course: Optional[str] = Field(default=None, max_length=200)
    enrollment_date: Optional[datetime] = None
    status: Optional[StudentStatus] = None

    model_config = {**API_MODEL_CONFIG, "use_enum_values": True}

    @field_validator("name", "email", "enrollment_date", "status")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

    @field_validator("enrollment_date")
    @classmethod
    def normalize_enrollment_date(cls, v):
        return as_utc(v)


class StudentResponse(BaseModel):
    """Full representation of a Student record."""

    id: uuid.UUID
    name: str
    email: str
    course: Optional[str] = None
    enrollment_date: datetime
    status: StudentStatus
    created_at: datetime
    updated_at: datetime

    model_config = {**API_MODEL_CONFIG, "from_attributes": True}
