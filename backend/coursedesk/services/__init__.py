# Services package init
"""
CourseDesk Backend — Services Layer
=====================================

What:  Record logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - RecordService (base.py): shared list/get/create/update/delete workflow
    - CourseService: courses ordered by name, unique on name
    - StudentService: students newest first, unique on email, enrollment default
    - DashboardService: aggregate counts

Services are stateless; each call receives the request's AsyncSession, so the
module-level instances are safe to share across concurrent requests.
"""
