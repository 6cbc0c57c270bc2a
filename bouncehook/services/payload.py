"""Decoding of inbound callback bodies and safe access into the decoded tree."""
from __future__ import annotations

import json
from typing import Any, Iterable

# Checked in this order; the first key present wins.
DISCRIMINATOR_KEYS = ("Type", "eventType", "notificationType")

_MISSING = object()


class PayloadParseError(ValueError):
    """The body is not a JSON object."""


def decode_body(body: bytes | str) -> dict[str, Any]:
    """Decode a raw request body into a JSON object."""

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PayloadParseError("Body is not valid UTF-8") from exc

    try:
        decoded = json.loads(body)
    except json.JSONDecodeError as exc:
        raise PayloadParseError(f"Body is not valid JSON: {exc.msg}") from exc

    if not isinstance(decoded, dict):
        raise PayloadParseError("Body is not a JSON object")
    return decoded


def dig(tree: Any, *path: str | int, default: Any = None) -> Any:
    """Follow ``path`` into nested dicts/lists, returning ``default`` on any miss.

    ``None`` values are treated the same as absent keys.
    """

    node = tree
    for step in path:
        if isinstance(node, dict):
            node = node.get(step, _MISSING)
        elif isinstance(node, list) and isinstance(step, int) and -len(node) <= step < len(node):
            node = node[step]
        else:
            return default
        if node is _MISSING or node is None:
            return default
    return node


def find_discriminator(tree: dict[str, Any], keys: Iterable[str] = DISCRIMINATOR_KEYS) -> str | None:
    """Return the value of the first discriminator key present in ``tree``."""

    for key in keys:
        if key in tree:
            value = tree[key]
            return value if isinstance(value, str) else str(value)
    return None


def dumps_payload(payload: Any, max_bytes: int = 32768) -> str:
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=True, default=str)
    if len(raw) > max_bytes:
        return raw[:max_bytes]
    return raw
