"""User-facing callback messages, keyed by message identifier."""
from __future__ import annotations

from typing import Any

from bouncehook.core.config import settings
from bouncehook.utils.logger import logger

SUBSCRIBE_ERROR = "sns.callback.subscribe.error"
NOTIFICATION_JSON_INVALID = "sns.callback.notification.json_invalid"
UNKNOWN_TYPE = "sns.callback.unknown_type"
JSON_INVALID = "sns.callback.json_invalid"
INVALID_PAYLOAD_TYPE = "sns.callback.invalid_payload_type"
SUPPRESSION_FAILED = "sns.callback.suppression_failed"

DEFAULT_LOCALE = "en"

CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        SUBSCRIBE_ERROR: "Callback to SubscribeURL from Amazon SNS failed.",
        NOTIFICATION_JSON_INVALID: "Amazon SNS notification message is not valid JSON.",
        UNKNOWN_TYPE: "Amazon SNS message type '{type}' is not supported.",
        JSON_INVALID: "Request body is not valid JSON.",
        INVALID_PAYLOAD_TYPE: "Amazon SNS '{type}' payload is missing required fields.",
        SUPPRESSION_FAILED: "Could not store the suppression update.",
    },
    "nl": {
        SUBSCRIBE_ERROR: "Callback naar SubscribeURL van Amazon SNS is mislukt.",
        NOTIFICATION_JSON_INVALID: "Het Amazon SNS notificatiebericht is geen geldige JSON.",
        UNKNOWN_TYPE: "Amazon SNS berichttype '{type}' wordt niet ondersteund.",
        JSON_INVALID: "De request body is geen geldige JSON.",
        INVALID_PAYLOAD_TYPE: "Het Amazon SNS '{type}' bericht mist verplichte velden.",
        SUPPRESSION_FAILED: "De suppressie-update kon niet worden opgeslagen.",
    },
}


class Translator:
    """Look up a message for the configured locale, falling back to English."""

    def __init__(self, locale: str | None = None) -> None:
        self.locale = locale or settings.locale

    def trans(self, key: str, **params: Any) -> str:
        template = CATALOGS.get(self.locale, {}).get(key)
        if template is None:
            template = CATALOGS[DEFAULT_LOCALE].get(key)
        if template is None:
            logger.warning("Missing translation for key=%s locale=%s", key, self.locale)
            return key
        return template.format(**params) if params else template
