"""Outbound webhook client backed by httpx.

Uses the shared httpx.AsyncClient created in the app lifespan so connections
are pooled across requests. Transport failures (DNS, connect, timeout) are
converted to WebhookDeliveryException; non-2xx responses are returned as-is
and judged by the caller.
"""

from __future__ import annotations

import httpx

from app.application.dtos.workflow import WebhookResponse
from app.domain.exceptions import WebhookDeliveryException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class HttpxWebhookClient:
    """Send webhook requests with a bounded timeout (implements IWebhookClient)."""

    def __init__(self, http_client: httpx.AsyncClient, timeout: float = 10.0) -> None:
        self._http = http_client
        self._timeout = timeout

    async def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | None,
    ) -> WebhookResponse:
        try:
            response = await self._http.request(
                method,
                url,
                headers=headers,
                content=body,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("Webhook %s %s failed: %s", method, url, reason)
            raise WebhookDeliveryException(url, reason) from exc
        logger.debug("Webhook %s %s returned %s", method, url, response.status_code)
        return WebhookResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
        )
