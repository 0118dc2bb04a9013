"""
CourseDesk Backend — Student Service Unit Tests
==================================================

What:  Student-specific behavior on top of the shared RecordService workflow:
       the enrollment date default, email conflicts and the dashboard counts.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from coursedesk.exceptions import ConflictError
from coursedesk.schemas.student import StudentCreate, StudentUpdate
from coursedesk.services.dashboard_service import DashboardService
from coursedesk.services.student_service import StudentService


class TestStudentServiceBuild:

    def setup_method(self):
        self.service = StudentService()

    def test_build_defaults_enrollment_date(self):
        before = datetime.now(timezone.utc)

        student = self.service._build(StudentCreate(name="Asha", email="asha@example.com"))

        assert student.enrollment_date >= before
        assert student.enrollment_date == student.created_at
        assert student.status == "active"
        assert student.course is None

    def test_build_keeps_given_enrollment_date(self):
        enrolled = datetime(2024, 9, 1, tzinfo=timezone.utc)

        student = self.service._build(
            StudentCreate(name="Asha", email="asha@example.com", enrollmentDate=enrolled)
        )

        assert student.enrollment_date == enrolled


class TestStudentServiceWrites:

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_create_success(self, mock_db_session):
        async def flush():
            mock_db_session.add.call_args[0][0].id = uuid.uuid4()
        mock_db_session.flush = AsyncMock(side_effect=flush)

        result = await self.service.create(
            mock_db_session,
            StudentCreate(name="Asha", email="asha@example.com", course="Maths"),
        )

        assert result.email == "asha@example.com"
        assert result.course == "Maths"
        assert result.status.value == "active"

    @pytest.mark.asyncio
    async def test_create_duplicate_email_is_conflict(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        )

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create(
                mock_db_session, StudentCreate(name="Asha", email="asha@example.com")
            )

        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_update_status_only(self, mock_db_session, sample_student):
        mock_db_session.get.return_value = sample_student

        result = await self.service.update(
            mock_db_session, str(sample_student.id), StudentUpdate(status="graduated")
        )

        assert result.status.value == "graduated"
        assert result.email == "asha@example.com"
        assert result.course == "Maths"


class TestDashboardService:

    @pytest.mark.asyncio
    async def test_stats_from_counts(self, mock_db_session):
        counts = [10, 7, 2, 4, 3]
        results = []
        for count in counts:
            result = MagicMock()
            result.scalar.return_value = count
            results.append(result)
        mock_db_session.execute = AsyncMock(side_effect=results)

        stats = await DashboardService().get_stats(mock_db_session)

        assert stats.total_students == 10
        assert stats.active_students == 7
        assert stats.graduated_students == 2
        assert stats.total_courses == 4
        assert stats.active_courses == 3
        assert mock_db_session.execute.await_count == 5
