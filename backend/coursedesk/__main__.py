"""
CourseDesk Backend — Server Entry Point
=========================================

Runs the API under uvicorn on the configured host and port:

    python -m coursedesk
    coursedesk            (console script)
"""

import uvicorn

from coursedesk.config import settings


def main() -> None:
    uvicorn.run(
        "coursedesk.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
