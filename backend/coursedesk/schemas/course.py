"""
CourseDesk Backend — Course Request/Response Schemas
======================================================

What:  Pydantic models defining the Course API contract.
Why:   Every write goes through an explicit input type; nothing from the
       request body reaches the ORM without passing these rules.
How:   Field names are snake_case in Python and camelCase on the wire
       (createdAt, updatedAt). Inputs accept either spelling.
"""

import enum
import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from coursedesk.schemas.common import API_MODEL_CONFIG


class CourseStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CourseCreate(BaseModel):
    """Body of POST /api/courses."""

    name: str = Field(min_length=1, max_length=200, description="Unique course name")
    description: Optional[str] = Field(default=None, description="Free-text description")
    duration: int = Field(ge=1, description="Course length, at least 1")
    status: CourseStatus = Field(default=CourseStatus.ACTIVE, validate_default=True)

    model_config = {**API_MODEL_CONFIG, "use_enum_values": True}


class CourseUpdate(BaseModel):
    """
    Body of PUT /api/courses/{id}.

    Every field is optional; only the fields present in the body are merged
    into the stored record. Sending null for a required field is rejected.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=1)
    status: Optional[CourseStatus] = None

    model_config = {**API_MODEL_CONFIG, "use_enum_values": True}

    @field_validator("name", "duration", "status")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CourseResponse(BaseModel):
    """Full representation of a Course record."""

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    duration: int
    status: CourseStatus
    created_at: datetime
    updated_at: datetime

    model_config = {**API_MODEL_CONFIG, "from_attributes": True}
