"""Decide whether an inbound envelope is an SNS callback and which kind."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from bouncehook.services.payload import find_discriminator


class NotificationType(str, Enum):
    SUBSCRIPTION_CONFIRMATION = "SubscriptionConfirmation"
    NOTIFICATION = "Notification"
    UNSUBSCRIBE_CONFIRMATION = "UnsubscribeConfirmation"
    DELIVERY = "Delivery"
    BOUNCE = "Bounce"
    COMPLAINT = "Complaint"
    UNKNOWN = "Unknown"

    @classmethod
    def from_value(cls, value: str | None) -> "NotificationType":
        if value is None or value == cls.UNKNOWN.value:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


# Top-level SNS envelope types; anything else belongs to another handler.
ENVELOPE_TYPES = frozenset(
    {
        NotificationType.NOTIFICATION,
        NotificationType.SUBSCRIPTION_CONFIRMATION,
        NotificationType.UNSUBSCRIBE_CONFIRMATION,
    }
)

# Types with a dispatch branch. Delivery/Bounce/Complaint only arrive nested.
DISPATCH_TYPES = frozenset(
    {
        NotificationType.SUBSCRIPTION_CONFIRMATION,
        NotificationType.NOTIFICATION,
        NotificationType.DELIVERY,
        NotificationType.BOUNCE,
        NotificationType.COMPLAINT,
    }
)


@dataclass(frozen=True)
class Classification:
    raw_type: str | None
    type: NotificationType
    is_ours: bool


def classify(envelope: dict[str, Any]) -> Classification:
    """Classify a decoded top-level envelope."""

    raw_type = find_discriminator(envelope)
    if raw_type is None:
        return Classification(raw_type=None, type=NotificationType.UNKNOWN, is_ours=False)

    notification_type = NotificationType.from_value(raw_type)
    return Classification(
        raw_type=raw_type,
        type=notification_type,
        is_ours=notification_type in ENVELOPE_TYPES,
    )
