"""
CourseDesk Backend — Shared Response Schemas
==============================================

What:  Response models that are not tied to one record type: errors,
       delete confirmations, dashboard stats and the health check.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# snake_case attributes in Python, camelCase keys in JSON; inputs accept both
API_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "A course with name 'Maths' already exists",
            "details": {"resource": "course", "field": "name"},
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    """Confirmation body returned by DELETE routes."""
    message: str


class DashboardStats(BaseModel):
    """
    Counts over the current collections, recomputed on every request.

    Serialized as totalStudents, activeStudents, graduatedStudents,
    totalCourses, activeCourses.
    """
    total_students: int
    active_students: int
    graduated_students: int
    total_courses: int
    active_courses: int

    model_config = API_MODEL_CONFIG


class HealthResponse(BaseModel):
    """Static liveness answer; does not reflect database state."""
    status: str = Field(default="UP")
    time: datetime = Field(description="Current server time (UTC)")
