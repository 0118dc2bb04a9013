"""
CourseDesk Backend — Student Route Handlers
=============================================

What:  /api/students collection and item routes, mirroring routes/courses.py.
       The list is ordered newest first; duplicates are detected on email.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coursedesk.database import get_db_session
from coursedesk.schemas.common import ErrorResponse, MessageResponse
from coursedesk.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from coursedesk.services.student_service import student_service

router = APIRouter(prefix="/api", tags=["Students"])


@router.get(
    "/students",
    response_model=List[StudentResponse],
    summary="List all students",
    description="Returns every student, most recently created first.",
)
async def list_students(db: AsyncSession = Depends(get_db_session)) -> List[StudentResponse]:
    return await student_service.list(db)


@router.get(
    "/students/{student_id}",
    response_model=StudentResponse,
    responses={404: {"description": "Student not found", "model": ErrorResponse}},
    summary="Get a student by ID",
)
async def get_student(
    student_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> StudentResponse:
    return await student_service.get(db, student_id)


@router.post(
    "/students",
    status_code=201,
    response_model=StudentResponse,
    responses={
        201: {"description": "Student created", "model": StudentResponse},
        400: {"description": "Invalid body or duplicate email", "model": ErrorResponse},
    },
    summary="Create a student",
    description="enrollmentDate defaults to the current time when omitted.",
)
async def create_student(
    payload: StudentCreate,
    db: AsyncSession = Depends(get_db_session),
) -> StudentResponse:
    return await student_service.create(db, payload)


@router.put(
    "/students/{student_id}",
    response_model=StudentResponse,
    responses={
        400: {"description": "Invalid body or duplicate email", "model": ErrorResponse},
        404: {"description": "Student not found", "model": ErrorResponse},
    },
    summary="Update a student",
)
async def update_student(
    student_id: str,
    payload: StudentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> StudentResponse:
    return await student_service.update(db, student_id, payload)


@router.delete(
    "/students/{student_id}",
    response_model=MessageResponse,
    summary="Delete a student",
)
async def delete_student(
    student_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await student_service.delete(db, student_id)
    return MessageResponse(message="Student deleted successfully")
