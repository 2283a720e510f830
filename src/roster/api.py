from fastapi import APIRouter

from roster.modules.auth import router as auth_router
from roster.modules.students import router as students_router

api_router = APIRouter()

api_router.include_router(auth_router, tags=["Authentication"])

api_router.include_router(students_router, prefix="/students", tags=["Students"])
