"""Errors raised while handling a recognized SNS callback."""
from __future__ import annotations

from bouncehook.services import translator


class CallbackError(Exception):
    """Base error; ``message_key`` selects the user-facing message."""

    message_key = translator.INVALID_PAYLOAD_TYPE

    def __init__(self, detail: str, **params: str) -> None:
        super().__init__(detail)
        self.params = params


class PayloadValidationError(CallbackError):
    """A required field of a recognized payload is missing or malformed."""

    message_key = translator.INVALID_PAYLOAD_TYPE

    def __init__(self, notification_type: str, detail: str) -> None:
        super().__init__(detail, type=notification_type)


class SuppressionWriteError(CallbackError):
    message_key = translator.SUPPRESSION_FAILED
