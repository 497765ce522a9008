"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse
from app.schemas.workflow import (
    ActionLogResponse,
    ExecutionDetailResponse,
    ExecutionResponse,
    ExecutionStatsResponse,
    TriggerRequest,
    TriggerResponse,
)

__all__ = [
    "ActionLogResponse",
    "ExecutionDetailResponse",
    "ExecutionResponse",
    "ExecutionStatsResponse",
    "HealthResponse",
    "TriggerRequest",
    "TriggerResponse",
]
