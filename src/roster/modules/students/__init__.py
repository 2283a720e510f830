"""
Students Module

Student enrollment and financial records:
1. Create / update / read operations guarded by the session gate
2. Attachment uploads (passport, diplom, image) stored on disk
3. Annual rollover job resetting payment counters in the rollover month

API Endpoints:
- POST /students - Create a student
- PUT /students/{id} - Update a student
- GET /students - List all students
- GET /students/year/{year} - List students of one year (404 when empty)
- GET /students/{id} - Get one student

Background Jobs (via APScheduler):
- students_annual_rollover: checked every 24 hours
"""

from .jobs import register_student_jobs
from .router import router

__all__ = ["router", "register_student_jobs"]
