"""
CourseDesk Backend — Course Service
=====================================

What:  CRUD for Course records.
How:   RecordService with name-ascending ordering and `name` as the unique
       field. A duplicate name on create or update raises ConflictError.
"""

from coursedesk.models.course import Course
from coursedesk.schemas.course import CourseResponse
from coursedesk.services.base import RecordService


class CourseService(RecordService[CourseResponse]):
    model = Course
    response_schema = CourseResponse
    resource = "course"
    unique_field = "name"

    def _ordering(self):
        return (Course.name.asc(),)


course_service = CourseService()
