"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, webhook client).
"""

from app.application.interfaces import (
    IExecutionLogStore,
    IRecordStore,
    IWebhookClient,
    IWorkflowEngine,
    IWorkflowStore,
)
from app.application.services.workflow_engine import WorkflowEngine

__all__ = [
    "IExecutionLogStore",
    "IRecordStore",
    "IWebhookClient",
    "IWorkflowEngine",
    "IWorkflowStore",
    "WorkflowEngine",
]
