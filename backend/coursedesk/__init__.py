"""
CourseDesk Backend — Application Package Initializer
====================================================

What: Marks the `coursedesk` directory as a Python package.
Why:  Enables module imports like `from coursedesk.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Record Logic)     │  ← One persistence call per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Owned engine + async sessions
    └─────────────────────────────────────┘

    Routes map HTTP to service calls; services map persistence results and
    failures to application exceptions; main.py maps those exceptions to
    JSON error responses.
"""

__version__ = "1.0.0"
