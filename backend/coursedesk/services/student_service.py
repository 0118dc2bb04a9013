"""
CourseDesk Backend — Student Service
======================================

What:  CRUD for Student records.
How:   RecordService with newest-first ordering and `email` as the unique
       field. Create fills in enrollment_date when the client omitted it.
"""

from typing import Any

from pydantic import BaseModel

from coursedesk.models.columns import utcnow
from coursedesk.models.student import Student
from coursedesk.schemas.student import StudentResponse
from coursedesk.services.base import RecordService


class StudentService(RecordService[StudentResponse]):
    model = Student
    response_schema = StudentResponse
    resource = "student"
    unique_field = "email"

    def _ordering(self):
        # id breaks ties between rows created within the same clock tick
        return (Student.created_at.desc(), Student.id.desc())

    def _build(self, data: BaseModel) -> Any:
        fields = data.model_dump()
        now = utcnow()
        if fields.get("enrollment_date") is None:
            fields["enrollment_date"] = now
        return Student(**fields, created_at=now, updated_at=now)


student_service = StudentService()
