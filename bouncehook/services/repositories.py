"""Query helpers over contacts, send records and suppression entries."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from bouncehook.db import models
from bouncehook.utils.datetime import utc_string
from bouncehook.utils.logger import logger


class SendRecordRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_token_and_address(self, token: str, address: str) -> models.SendRecord | None:
        """Return the single send record for ``token`` and ``address``, if unique."""

        records = (
            self.db.query(models.SendRecord)
            .filter(models.SendRecord.tracking_hash == token, models.SendRecord.email_address == address)
            .limit(2)
            .all()
        )
        if len(records) > 1:
            logger.warning("Multiple send records match token=%s address=%s, ignoring correlation", token, address)
            return None
        return records[0] if records else None

    def find_email_id_by_token(self, token: str) -> int | None:
        """Return the email any send with ``token`` belongs to."""

        return (
            self.db.query(models.SendRecord.email_id)
            .filter(models.SendRecord.tracking_hash == token, models.SendRecord.email_id.is_not(None))
            .order_by(models.SendRecord.id)
            .limit(1)
            .scalar()
        )

    def mark_failed(self, record: models.SendRecord, reason: str) -> None:
        """Flag the send as failed and append to its bounce history."""

        details: dict[str, Any] = dict(record.details or {})
        bounces = list(details.get("bounces") or [])
        bounces.append({"datetime": utc_string(), "reason": reason})
        details["bounces"] = bounces

        # Reassigned so the JSON column registers the change.
        record.details = details
        record.is_failed = True
        self.db.add(record)


class ContactRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, contact_id: int) -> models.Contact | None:
        return self.db.get(models.Contact, contact_id)

    def find_by_address(self, address: str) -> list[models.Contact]:
        return (
            self.db.query(models.Contact)
            .filter(func.lower(models.Contact.email) == address.lower())
            .order_by(models.Contact.id)
            .all()
        )


class SuppressionRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def exists(self, *, contact_id: int | None, email: str, channel: str, channel_id: str | None) -> bool:
        query = self.db.query(models.SuppressionEntry).filter(
            models.SuppressionEntry.channel == channel,
            models.SuppressionEntry.channel_id.is_(None)
            if channel_id is None
            else models.SuppressionEntry.channel_id == channel_id,
        )
        if contact_id is None:
            query = query.filter(
                models.SuppressionEntry.contact_id.is_(None),
                func.lower(models.SuppressionEntry.email) == email.lower(),
            )
        else:
            query = query.filter(models.SuppressionEntry.contact_id == contact_id)
        return query.first() is not None

    def add(
        self,
        *,
        contact_id: int | None,
        email: str,
        channel: str,
        channel_id: str | None,
        reason: str,
        comments: str,
    ) -> models.SuppressionEntry:
        entry = models.SuppressionEntry(
            contact_id=contact_id,
            email=email,
            channel=channel,
            channel_id=channel_id,
            reason=reason,
            comments=comments,
        )
        self.db.add(entry)
        return entry
