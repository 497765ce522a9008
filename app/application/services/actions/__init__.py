"""Workflow actions: handlers per action type and the dispatcher that runs them."""

from app.application.services.actions.dispatcher import ActionDispatcher
from app.application.services.actions.handlers import (
    AssignOwnerHandler,
    CreateRecordHandler,
    CreateTaskHandler,
    SendEmailHandler,
    SendNotificationHandler,
    UpdateFieldHandler,
    WebhookCallHandler,
)

__all__ = [
    "ActionDispatcher",
    "AssignOwnerHandler",
    "CreateRecordHandler",
    "CreateTaskHandler",
    "SendEmailHandler",
    "SendNotificationHandler",
    "UpdateFieldHandler",
    "WebhookCallHandler",
]
