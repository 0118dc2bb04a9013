# Routes package init
"""
CourseDesk Backend — API Routes Package
=========================================

Route Inventory:
    - courses.py:    /api/courses, /api/courses/{id}    (GET, POST, PUT, DELETE)
    - students.py:   /api/students, /api/students/{id}  (GET, POST, PUT, DELETE)
    - dashboard.py:  GET /api/dashboard/stats
    - health.py:     GET /health, GET /api/health

Routes are thin: they take a session from the get_db_session dependency,
call one service method and return its result. Business rules live in
services; error formatting lives in main.register_exception_handlers.
"""
