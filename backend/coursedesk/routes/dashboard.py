"""
CourseDesk Backend — Dashboard Route
======================================

What:  GET /api/dashboard/stats, the counts shown on the dashboard.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coursedesk.database import get_db_session
from coursedesk.schemas.common import DashboardStats
from coursedesk.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard statistics",
    description=(
        "Total and active student counts, graduated students, and total and "
        "active course counts. Recomputed on every call."
    ),
)
async def get_stats(db: AsyncSession = Depends(get_db_session)) -> DashboardStats:
    return await dashboard_service.get_stats(db)
