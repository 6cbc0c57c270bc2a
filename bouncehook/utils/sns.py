"""SNS helper utilities for subscription handshakes."""
from __future__ import annotations

import requests

from bouncehook.utils.logger import logger


def confirm_subscription(client: requests.Session, subscribe_url: str, timeout_seconds: int) -> str | None:
    """Call back the SubscribeURL; return ``None`` on success or the failure reason."""

    try:
        response = client.get(subscribe_url, timeout=timeout_seconds)
    except requests.RequestException as exc:
        return str(exc)

    if response.status_code == 200:
        logger.info("Callback to SubscribeURL from Amazon SNS successfully")
        return None
    return f"HTTP Code {response.status_code}, {response.text}"
