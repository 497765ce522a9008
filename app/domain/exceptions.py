"""Domain exceptions for the workflow engine.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Action
handlers raise them; the dispatcher converts them into failed results and
the presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class WorkflowEngineException(Exception):
    """Base exception for all workflow engine errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API error bodies."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(WorkflowEngineException):
    """Raised when action configuration or input is invalid (e.g. missing field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResolutionException(WorkflowEngineException):
    """Raised when an action cannot resolve its target (e.g. no user to assign to)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "RESOLUTION_ERROR", details)


class UnknownEntityTypeException(WorkflowEngineException):
    """Raised when an entity type does not map to a known CRM table."""

    def __init__(self, entity_type: str) -> None:
        """Initialize with the unresolvable entity type.

        Args:
            entity_type: The entity type that has no table.
        """
        super().__init__(
            f"Unknown entity type: {entity_type}",
            "UNKNOWN_ENTITY_TYPE",
            {"entity_type": entity_type},
        )


class ResourceNotFoundException(WorkflowEngineException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'workflow_execution', 'lead').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class WebhookDeliveryException(WorkflowEngineException):
    """Raised when a webhook request fails at the transport level."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            f"Webhook request failed: {reason}",
            "WEBHOOK_DELIVERY_ERROR",
            {"url": url},
        )


class SqlNotConfiguredException(WorkflowEngineException):
    """Raised when an operation requires the database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
