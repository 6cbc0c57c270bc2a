"""Transport webhook event passed to callback handlers, and its response builder."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping

from fastapi import status
from fastapi.responses import JSONResponse


@dataclass
class Outcome:
    """Result of processing one callback request."""

    handled: bool = False
    has_error: bool = False
    message: str = "PROCESSED"


@dataclass
class TransportWebhookEvent:
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    response: JSONResponse | None = None

    def set_response(self, response: JSONResponse) -> None:
        self.response = response

    @property
    def has_response(self) -> bool:
        return self.response is not None


WebhookHandler = Callable[[TransportWebhookEvent], None]


def build_response(outcome: Outcome) -> JSONResponse:
    success = not outcome.has_error
    return JSONResponse(
        content={"message": outcome.message, "success": success},
        status_code=status.HTTP_200_OK if success else status.HTTP_400_BAD_REQUEST,
    )


def dispatch_webhook(event: TransportWebhookEvent, handlers: Iterable[WebhookHandler]) -> TransportWebhookEvent:
    """Offer the event to each handler until one of them answers it."""

    for handler in handlers:
        handler(event)
        if event.has_response:
            break
    return event
