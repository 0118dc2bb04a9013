# Middleware package init
"""
CourseDesk Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs before Logging so the access line carries the ID.
    CORS sits closest to the routes and answers preflight OPTIONS itself.
"""
