"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IAssignmentCursorStore,
    IDelayedActionQueue,
    IExecutionLogStore,
    INotificationRepository,
    IRecordStore,
    ITaskRepository,
    ITeamRepository,
    IWorkflowStore,
)
from app.application.interfaces.services import (
    IActionHandler,
    IAssignmentStrategy,
    IWebhookClient,
    IWorkflowEngine,
)

__all__ = [
    "IActionHandler",
    "IAssignmentCursorStore",
    "IAssignmentStrategy",
    "IDelayedActionQueue",
    "IExecutionLogStore",
    "INotificationRepository",
    "IRecordStore",
    "ITaskRepository",
    "ITeamRepository",
    "IWebhookClient",
    "IWorkflowEngine",
    "IWorkflowStore",
]
