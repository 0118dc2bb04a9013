"""
CourseDesk Backend — Dashboard Service
========================================

What:  Aggregate counts for the dashboard summary.
Why:   Gives the frontend one call for its header cards.
How:   Five COUNT queries against the current tables; nothing is cached, so
       the numbers always reflect persisted state.
"""

import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coursedesk.exceptions import DatabaseError
from coursedesk.models.course import Course
from coursedesk.models.student import Student
from coursedesk.schemas.common import DashboardStats

logger = logging.getLogger(__name__)


class DashboardService:

    async def _count(self, db: AsyncSession, model: Any, status: Optional[str] = None) -> int:
        query = select(func.count()).select_from(model)
        if status is not None:
            query = query.where(model.status == status)
        result = await db.execute(query)
        return result.scalar() or 0

    async def get_stats(self, db: AsyncSession) -> DashboardStats:
        try:
            return DashboardStats(
                total_students=await self._count(db, Student),
                active_students=await self._count(db, Student, "active"),
                graduated_students=await self._count(db, Student, "graduated"),
                total_courses=await self._count(db, Course),
                active_courses=await self._count(db, Course, "active"),
            )
        except SQLAlchemyError as e:
            logger.error("Database error computing dashboard stats: %s", e, exc_info=True)
            raise DatabaseError(
                message="Could not compute dashboard statistics. Please try again.",
                context={"error_type": type(e).__name__},
            )


dashboard_service = DashboardService()
