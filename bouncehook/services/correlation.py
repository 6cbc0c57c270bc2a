"""Tie a bounce/complaint recipient back to the send that caused it."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Union

from bouncehook.db import models
from bouncehook.services.payload import dig
from bouncehook.services.repositories import ContactRepository, SendRecordRepository

CORRELATION_HEADER = "X-EMAIL-ID"

_DISPLAY_NAME_ADDRESS = re.compile(r"<(.*)>", re.DOTALL)


def cleanup_email_address(value: str) -> str:
    """Reduce ``"Display Name <address>"`` to ``address``; anything else is returned as is."""

    match = _DISPLAY_NAME_ADDRESS.search(value)
    if match is None:
        return value
    return match.group(1)


def get_correlation_token(payload: dict[str, Any]) -> str | None:
    """Return the value of the first ``X-EMAIL-ID`` mail header, if any."""

    headers = dig(payload, "mail", "headers")
    if not isinstance(headers, list):
        return None

    for header in headers:
        name = dig(header, "name")
        if isinstance(name, str) and name.upper() == CORRELATION_HEADER:
            value = dig(header, "value")
            return None if value is None else str(value)
    return None


@dataclass(frozen=True)
class FoundRecord:
    record: models.SendRecord


@dataclass(frozen=True)
class FoundByAddressOnly:
    token: str
    contacts: list[models.Contact] = field(default_factory=list)
    email_id: int | None = None


@dataclass(frozen=True)
class NotFound:
    """No correlation token; only the global channel can be suppressed."""


Correlation = Union[FoundRecord, FoundByAddressOnly, NotFound]


@dataclass(frozen=True)
class ResolvedIdentity:
    send_record_id: int | None = None
    contact_id: int | None = None


class CorrelationResolver:
    def __init__(self, send_records: SendRecordRepository, contacts: ContactRepository) -> None:
        self.send_records = send_records
        self.contacts = contacts

    def resolve(self, address: str, token: str | None) -> Correlation:
        if not token:
            return NotFound()

        record = self.send_records.find_by_token_and_address(token, address)
        if record is not None:
            return FoundRecord(record=record)

        return FoundByAddressOnly(
            token=token,
            contacts=self.contacts.find_by_address(address),
            email_id=self.send_records.find_email_id_by_token(token),
        )

    def identity(self, correlation: Correlation) -> ResolvedIdentity:
        if isinstance(correlation, FoundRecord):
            return ResolvedIdentity(
                send_record_id=correlation.record.id,
                contact_id=correlation.record.contact_id,
            )
        return ResolvedIdentity()
