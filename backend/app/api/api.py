"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from app.api.v1 import ai, resumes, users

api_router = APIRouter()

# Include all v1 routers with their prefixes and tags
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    resumes.router,
    prefix="/resumes",
    tags=["Resumes"],
)

api_router.include_router(
    ai.router,
    prefix="/ai",
    tags=["AI"],
)
