from fastapi import APIRouter

from campus_portal.api.endpoints import auth, student
from campus_portal.api.endpoints.admin import admin_router

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(admin_router)
api_router.include_router(student.router)
