"""
CourseDesk Backend — Course Route Handlers
============================================

What:  /api/courses collection and item routes.
How:   Each handler takes a request-scoped session, calls one CourseService
       method and returns its result. Errors propagate as application
       exceptions and are formatted by the handlers in main.py.

Route Inventory:
    GET    /api/courses          list, name ascending
    GET    /api/courses/{id}     one course or 404
    POST   /api/courses          201 + created course, 400 on bad input or duplicate name
    PUT    /api/courses/{id}     merged course, 404 if absent
    DELETE /api/courses/{id}     confirmation, even when nothing matched
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coursedesk.database import get_db_session
from coursedesk.schemas.common import ErrorResponse, MessageResponse
from coursedesk.schemas.course import CourseCreate, CourseResponse, CourseUpdate
from coursedesk.services.course_service import course_service

router = APIRouter(prefix="/api", tags=["Courses"])


@router.get(
    "/courses",
    response_model=List[CourseResponse],
    summary="List all courses",
    description="Returns every course, ordered by name ascending.",
)
async def list_courses(db: AsyncSession = Depends(get_db_session)) -> List[CourseResponse]:
    return await course_service.list(db)


@router.get(
    "/courses/{course_id}",
    response_model=CourseResponse,
    responses={404: {"description": "Course not found", "model": ErrorResponse}},
    summary="Get a course by ID",
)
async def get_course(
    course_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> CourseResponse:
    return await course_service.get(db, course_id)


@router.post(
    "/courses",
    status_code=201,
    response_model=CourseResponse,
    responses={
        201: {"description": "Course created", "model": CourseResponse},
        400: {"description": "Invalid body or duplicate name", "model": ErrorResponse},
    },
    summary="Create a course",
)
async def create_course(
    payload: CourseCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CourseResponse:
    return await course_service.create(db, payload)


@router.put(
    "/courses/{course_id}",
    response_model=CourseResponse,
    responses={
        400: {"description": "Invalid body or duplicate name", "model": ErrorResponse},
        404: {"description": "Course not found", "model": ErrorResponse},
    },
    summary="Update a course",
    description="Merges the fields present in the body into the stored course.",
)
async def update_course(
    course_id: str,
    payload: CourseUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> CourseResponse:
    return await course_service.update(db, course_id, payload)


@router.delete(
    "/courses/{course_id}",
    response_model=MessageResponse,
    summary="Delete a course",
    description="Removes the course if it exists. Deleting an unknown id also succeeds.",
)
async def delete_course(
    course_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await course_service.delete(db, course_id)
    return MessageResponse(message="Course deleted successfully")
