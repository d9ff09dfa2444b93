"""
Admin API endpoints. All require the admin role.
"""
from fastapi import APIRouter

from alumni.api.endpoints.admin import users

admin_router = APIRouter(prefix="/admin", tags=["Admin"])

admin_router.include_router(users.router, prefix="/users", tags=["Admin Users"])
