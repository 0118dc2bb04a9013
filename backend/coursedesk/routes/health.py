"""
CourseDesk Backend — Health Check Route
=========================================

What:  Liveness endpoint for load balancers and serverless platform probes.
How:   Returns a static "UP" plus the current server time.

This check deliberately does not touch the Database object: it answers
"is the process serving HTTP", and must stay UP while the database is down.
/api/health serves the same body for clients that only route /api/*.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from coursedesk.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
@router.get("/api/health", response_model=HealthResponse, include_in_schema=False)
async def health_check() -> HealthResponse:
    return HealthResponse(status="UP", time=datetime.now(timezone.utc))
