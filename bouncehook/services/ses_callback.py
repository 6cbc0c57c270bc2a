"""Amazon SES feedback delivered through Amazon SNS HTTP(S) subscriptions.

The subscriber only answers requests whose body is an SNS envelope. Anything
else is left for other transport handlers.

http://docs.aws.amazon.com/ses/latest/DeveloperGuide/best-practices-bounces-complaints.html
"""
from __future__ import annotations

from typing import Any, Callable

import requests

from bouncehook.api.webhooks import Outcome, TransportWebhookEvent, build_response
from bouncehook.services import translator as messages
from bouncehook.services.classifier import DISPATCH_TYPES, NotificationType, classify
from bouncehook.services.correlation import cleanup_email_address, get_correlation_token
from bouncehook.services.errors import CallbackError, PayloadValidationError, SuppressionWriteError
from bouncehook.services.payload import PayloadParseError, decode_body, dig, dumps_payload, find_discriminator
from bouncehook.services.suppression import RecipientEvent, SuppressionApplier, SuppressionReason
from bouncehook.services.translator import Translator
from bouncehook.utils.dsn import dsn_scheme
from bouncehook.utils.logger import logger
from bouncehook.utils.sns import confirm_subscription

# SES notifications use notificationType; configuration set events use eventType.
NESTED_DISCRIMINATOR_KEYS = ("notificationType", "eventType")


class AmazonSesCallbackSubscriber:
    def __init__(
        self,
        applier: SuppressionApplier,
        client: requests.Session,
        translator: Translator,
        *,
        mailer_dsn: str,
        ses_scheme: str = "ses+api",
        subscribe_timeout_seconds: int = 10,
    ) -> None:
        self.applier = applier
        self.client = client
        self.translator = translator
        self.mailer_dsn = mailer_dsn
        self.ses_scheme = ses_scheme.lower()
        self.subscribe_timeout_seconds = subscribe_timeout_seconds
        self._handlers: dict[NotificationType, Callable[[dict[str, Any], Outcome], None]] = {
            NotificationType.SUBSCRIPTION_CONFIRMATION: self._handle_subscription_confirmation,
            NotificationType.NOTIFICATION: self._handle_notification,
            NotificationType.DELIVERY: self._handle_delivery,
            NotificationType.COMPLAINT: self._handle_complaint,
            NotificationType.BOUNCE: self._handle_bounce,
        }

    def __call__(self, event: TransportWebhookEvent) -> None:
        self.process_callback_request(event)

    def process_callback_request(self, event: TransportWebhookEvent) -> None:
        try:
            payload = decode_body(event.body)
        except PayloadParseError:
            # Not our webhook, let other handlers try.
            return

        classification = classify(payload)
        if not classification.is_ours:
            return

        logger.debug("start process_callback_request - Amazon SNS Webhook")
        self._note_transport()

        outcome = self.process_payload(payload, classification.raw_type)

        logger.debug("end process_callback_request - Amazon SNS Webhook")
        event.set_response(build_response(outcome))

    def process_payload(self, payload: dict[str, Any], notification_type: str | None) -> Outcome:
        """Process a decoded SNS envelope or SES notification of the given type."""

        try:
            return self._dispatch(payload, notification_type)
        except CallbackError as exc:
            logger.error("SES webhook payload could not be processed: %s", exc)
            return Outcome(
                handled=True,
                has_error=True,
                message=self.translator.trans(exc.message_key, **exc.params),
            )

    def _dispatch(self, payload: dict[str, Any], raw_type: str | None) -> Outcome:
        outcome = Outcome()
        notification_type = NotificationType.from_value(raw_type)

        if notification_type not in DISPATCH_TYPES:
            logger.warning(
                "SES webhook payload, not processed due to unknown type. Type=%s payload=%s",
                raw_type,
                dumps_payload(payload),
            )
            outcome.message = self.translator.trans(messages.UNKNOWN_TYPE, type=raw_type)
            return outcome

        outcome.handled = True
        self._handlers[notification_type](payload, outcome)
        return outcome

    def _note_transport(self) -> None:
        if dsn_scheme(self.mailer_dsn) != self.ses_scheme:
            logger.info("Processing SNS webhook (SES is not the default transport, may be secondary transport)")

    def _handle_subscription_confirmation(self, payload: dict[str, Any], outcome: Outcome) -> None:
        subscribe_url = dig(payload, "SubscribeURL")
        if not isinstance(subscribe_url, str) or not subscribe_url:
            raise PayloadValidationError(NotificationType.SUBSCRIPTION_CONFIRMATION.value, "Missing SubscribeURL")

        reason = confirm_subscription(self.client, subscribe_url, self.subscribe_timeout_seconds)
        if reason is not None:
            logger.error("Callback to SubscribeURL from Amazon SNS failed, reason: %s", reason)
            outcome.has_error = True
            outcome.message = self.translator.trans(messages.SUBSCRIBE_ERROR)

    def _handle_notification(self, payload: dict[str, Any], outcome: Outcome) -> None:
        body = dig(payload, "Message")
        try:
            if not isinstance(body, str):
                raise PayloadParseError("Message is not a string")
            message = decode_body(body)
        except PayloadParseError:
            logger.error("AmazonCallback: Invalid Notification JSON Payload")
            outcome.has_error = True
            outcome.message = self.translator.trans(messages.NOTIFICATION_JSON_INVALID)
            return

        nested_type = find_discriminator(message, NESTED_DISCRIMINATOR_KEYS)
        if nested_type is None:
            logger.error("AmazonCallback: Notification JSON Payload has no notificationType")
            outcome.has_error = True
            outcome.message = self.translator.trans(messages.NOTIFICATION_JSON_INVALID)
            return

        # The unwrapped message's own outcome does not change the envelope's.
        try:
            self._dispatch(message, nested_type)
        except PayloadValidationError as exc:
            logger.warning("AmazonCallback: wrapped %s notification not processed: %s", nested_type, exc)
        except SuppressionWriteError:
            logger.error("AmazonCallback: Notification could not be stored")
            outcome.has_error = True
            outcome.message = self.translator.trans(messages.NOTIFICATION_JSON_INVALID)

    def _handle_delivery(self, payload: dict[str, Any], outcome: Outcome) -> None:
        return None

    def _handle_complaint(self, payload: dict[str, Any], outcome: Outcome) -> None:
        complaint = dig(payload, "complaint")
        if not isinstance(complaint, dict):
            raise PayloadValidationError(NotificationType.COMPLAINT.value, "Missing complaint object")

        # abuse / auth-failure / fraud / not-spam / other / virus
        feedback_type = dig(complaint, "complaintFeedbackType", default="unknown")
        token = get_correlation_token(payload)
        events = [
            RecipientEvent(
                email_address=self._recipient_address(recipient, NotificationType.COMPLAINT),
                correlation_token=token,
                reason_code=str(feedback_type),
                reason=SuppressionReason.UNSUBSCRIBED,
            )
            for recipient in self._recipients(complaint, "complainedRecipients", NotificationType.COMPLAINT)
        ]

        for event in events:
            self.applier.apply(event)
            logger.debug("Mark email '%s' has complained, reason: %s", event.email_address, event.reason_code)

    def _handle_bounce(self, payload: dict[str, Any], outcome: Outcome) -> None:
        bounce = dig(payload, "bounce")
        if not isinstance(bounce, dict) or "bounceType" not in bounce:
            raise PayloadValidationError(NotificationType.BOUNCE.value, "Missing bounce.bounceType")

        if bounce["bounceType"] != "Permanent":
            logger.debug("Ignoring %s bounce", bounce["bounceType"])
            return

        sub_type = dig(bounce, "bounceSubType", default="unknown")
        token = get_correlation_token(payload)
        events = []
        for recipient in self._recipients(bounce, "bouncedRecipients", NotificationType.BOUNCE):
            diagnostic = dig(recipient, "diagnosticCode", default="unknown")
            events.append(
                RecipientEvent(
                    email_address=self._recipient_address(recipient, NotificationType.BOUNCE),
                    correlation_token=token,
                    reason_code=f"AWS: {sub_type}: {diagnostic}",
                    reason=SuppressionReason.BOUNCED,
                )
            )

        for event in events:
            self.applier.apply(event)
            logger.debug("Mark email '%s' as bounced, reason: %s", event.email_address, event.reason_code)

    @staticmethod
    def _recipients(section: dict[str, Any], key: str, notification_type: NotificationType) -> list[Any]:
        recipients = section.get(key)
        if not isinstance(recipients, list):
            raise PayloadValidationError(notification_type.value, f"Missing {key}")
        return recipients

    @staticmethod
    def _recipient_address(recipient: Any, notification_type: NotificationType) -> str:
        address = dig(recipient, "emailAddress")
        if not isinstance(address, str) or not address:
            raise PayloadValidationError(notification_type.value, "Recipient without emailAddress")
        return cleanup_email_address(address)
