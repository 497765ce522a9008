"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the tenant header, DB sessions and the
workflow services. Routes depend only on these dependencies, not on
infrastructure directly.
"""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.workflow_engine import WorkflowEngine
from app.application.use_cases.workflows import WorkflowExecutionAuditService
from app.core.config import get_settings
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.services import (
    build_execution_audit_service,
    build_workflow_engine,
)

_MAX_TENANT_ID_LENGTH = 64


async def get_tenant_id(request: Request) -> str:
    """Resolve tenant ID from the tenant header; 400 when missing or malformed."""
    name = get_settings().tenant_header_name
    value = (request.headers.get(name) or "").strip()
    if not value:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required header: {name}",
        )
    if len(value) > _MAX_TENANT_ID_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid tenant ID (max {_MAX_TENANT_ID_LENGTH} characters)",
        )
    return value


def get_webhook_http_client(request: Request) -> httpx.AsyncClient:
    """Shared httpx client created in the lifespan."""
    client = getattr(request.app.state, "webhook_http_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Webhook HTTP client not initialized")
    return client


async def get_execution_audit_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowExecutionAuditService:
    """Read-only access to executions, action logs and stats."""
    return build_execution_audit_service(db)


async def get_workflow_engine_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_webhook_http_client)],
) -> WorkflowEngine:
    """Workflow engine bound to a request transaction (commit on success)."""
    return build_workflow_engine(db, http_client)
