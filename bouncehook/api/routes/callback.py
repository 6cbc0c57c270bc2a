"""Inbound transport callback endpoint."""
from __future__ import annotations

from typing import Iterator

import requests
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from bouncehook.api.webhooks import Outcome, TransportWebhookEvent, WebhookHandler, build_response, dispatch_webhook
from bouncehook.core.config import settings
from bouncehook.db.session import get_db
from bouncehook.services import translator as messages
from bouncehook.services.payload import PayloadParseError, decode_body
from bouncehook.services.ses_callback import AmazonSesCallbackSubscriber
from bouncehook.services.suppression import SuppressionApplier
from bouncehook.services.translator import Translator
from bouncehook.utils.logger import logger

router = APIRouter(prefix="/mailer", tags=["callbacks"])


def get_http_client() -> Iterator[requests.Session]:
    client = requests.Session()
    try:
        yield client
    finally:
        client.close()


def get_webhook_handlers(
    db: Session = Depends(get_db),
    client: requests.Session = Depends(get_http_client),
) -> list[WebhookHandler]:
    """Transport callback handlers, tried in order."""

    subscriber = AmazonSesCallbackSubscriber(
        SuppressionApplier(db),
        client,
        Translator(settings.locale),
        mailer_dsn=settings.mailer_dsn,
        ses_scheme=settings.ses_transport_scheme,
        subscribe_timeout_seconds=settings.sns_subscribe_timeout_seconds,
    )
    return [subscriber]


@router.post("/callback")
async def transport_callback(
    request: Request,
    handlers: list[WebhookHandler] = Depends(get_webhook_handlers),
) -> JSONResponse:
    """Hand the raw callback body to the registered transport handlers."""

    event = TransportWebhookEvent(body=await request.body(), headers=dict(request.headers))
    await run_in_threadpool(dispatch_webhook, event, handlers)

    if event.response is None:
        logger.info("Transport callback not handled by any handler")
        try:
            decode_body(event.body)
        except PayloadParseError:
            return build_response(
                Outcome(has_error=True, message=Translator(settings.locale).trans(messages.JSON_INVALID))
            )
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No transport callback handler processed this request",
        )
    return event.response
