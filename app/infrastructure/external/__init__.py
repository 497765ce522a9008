"""External service adapters (outbound HTTP)."""

from app.infrastructure.external.webhook import HttpxWebhookClient

__all__ = ["HttpxWebhookClient"]
