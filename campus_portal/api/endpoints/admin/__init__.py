"""
Admin API endpoints. Every route requires the MANAGE_CONTENT capability.
"""
from fastapi import APIRouter, Depends

from campus_portal.api.endpoints.admin import sections, students, files, news, knowledge_base
from campus_portal.modules.auth import get_current_admin

admin_router = APIRouter(prefix="/admin", dependencies=[Depends(get_current_admin)])

admin_router.include_router(sections.router, prefix="/sections", tags=["Admin Sections"])
admin_router.include_router(students.router, prefix="/students", tags=["Admin Students"])
admin_router.include_router(files.router, prefix="/files", tags=["Admin Files"])
admin_router.include_router(news.router, prefix="/news", tags=["Admin News"])
admin_router.include_router(knowledge_base.router, prefix="/knowledge-base", tags=["Admin Knowledge Base"])
