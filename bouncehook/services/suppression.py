"""Write do-not-contact entries for bounced and complaining recipients."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bouncehook.services.correlation import (
    CorrelationResolver,
    FoundByAddressOnly,
    FoundRecord,
)
from bouncehook.services.errors import SuppressionWriteError
from bouncehook.services.repositories import ContactRepository, SendRecordRepository, SuppressionRepository
from bouncehook.utils.logger import logger

EMAIL_CHANNEL = "email"


def _email_channel_id(email_id: int | None, token: str | None) -> str | None:
    """Scope key of the originating email; the token stands in when the email is unknown."""
    return str(email_id) if email_id is not None else token


class SuppressionReason(str, Enum):
    BOUNCED = "bounced"
    UNSUBSCRIBED = "unsubscribed"


@dataclass(frozen=True)
class RecipientEvent:
    email_address: str
    correlation_token: str | None
    reason_code: str
    reason: SuppressionReason


class SuppressionApplier:
    """Apply one recipient event and commit it.

    With a send record the contact is suppressed on that email only. Without a
    token the address is suppressed on the global email channel.
    """

    def __init__(
        self,
        db: Session,
        resolver: CorrelationResolver | None = None,
        suppressions: SuppressionRepository | None = None,
    ) -> None:
        self.db = db
        self.send_records = SendRecordRepository(db)
        self.contacts = ContactRepository(db)
        self.resolver = resolver or CorrelationResolver(self.send_records, self.contacts)
        self.suppressions = suppressions or SuppressionRepository(db)

    def apply(self, event: RecipientEvent) -> int:
        """Return the number of suppression entries written."""

        try:
            correlation = self.resolver.resolve(event.email_address, event.correlation_token)
            if isinstance(correlation, FoundRecord):
                written = self._apply_to_record(correlation, event)
            elif isinstance(correlation, FoundByAddressOnly):
                written = self._apply_to_contacts(correlation, event)
            else:
                written = self._apply_global(event)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to store suppression for %s", event.email_address)
            raise SuppressionWriteError(str(exc)) from exc

        identity = self.resolver.identity(correlation)
        logger.debug(
            "Suppression applied address=%s reason=%s send_record=%s contact=%s written=%s",
            event.email_address,
            event.reason.value,
            identity.send_record_id,
            identity.contact_id,
            written,
        )
        return written

    def _apply_to_record(self, correlation: FoundRecord, event: RecipientEvent) -> int:
        record = correlation.record
        self.send_records.mark_failed(record, event.reason_code)

        if record.contact_id is None or self.contacts.get(record.contact_id) is None:
            return 0

        return self._suppress(record.contact_id, event, _email_channel_id(record.email_id, event.correlation_token))

    def _apply_to_contacts(self, correlation: FoundByAddressOnly, event: RecipientEvent) -> int:
        if not correlation.contacts:
            logger.debug("No contact found for %s, nothing to suppress", event.email_address)
            return 0
        channel_id = _email_channel_id(correlation.email_id, correlation.token)
        return sum(self._suppress(contact.id, event, channel_id) for contact in correlation.contacts)

    def _apply_global(self, event: RecipientEvent) -> int:
        contacts = self.contacts.find_by_address(event.email_address)
        if not contacts:
            return self._suppress(None, event, None)
        return sum(self._suppress(contact.id, event, None) for contact in contacts)

    def _suppress(self, contact_id: int | None, event: RecipientEvent, channel_id: str | None) -> int:
        if self.suppressions.exists(
            contact_id=contact_id,
            email=event.email_address,
            channel=EMAIL_CHANNEL,
            channel_id=channel_id,
        ):
            logger.debug(
                "Already suppressed contact=%s address=%s channel_id=%s",
                contact_id,
                event.email_address,
                channel_id,
            )
            return 0

        self.suppressions.add(
            contact_id=contact_id,
            email=event.email_address,
            channel=EMAIL_CHANNEL,
            channel_id=channel_id,
            reason=event.reason.value,
            comments=event.reason_code,
        )
        return 1
