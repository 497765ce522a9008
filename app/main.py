"""FastAPI application entry point for the workflow engine.

create_app() only wires things together: lifespan (shared webhook client,
engine dispose), exception handlers and the v1 routers. Settings are read
when the app is built, so tests can adjust the environment first.
"""

from fastapi import FastAPI

from app.api.v1.router import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan

_OPENAPI_TAGS = [
    {"name": "workflow-triggers", "description": "Run tenant workflows for a CRM record event."},
    {"name": "workflow-executions", "description": "Execution audit trail and stats."},
    {"name": "health", "description": "Liveness."},
]


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
        openapi_tags=_OPENAPI_TAGS,
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
