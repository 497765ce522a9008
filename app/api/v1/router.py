"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import executions, health, triggers

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    executions.router, prefix="/workflow-executions", tags=["workflow-executions"]
)
api_router.include_router(
    triggers.router, prefix="/workflow-triggers", tags=["workflow-triggers"]
)
