"""Suppression list endpoints for operators."""
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy import func
from sqlalchemy.orm import Session

from bouncehook.db import models
from bouncehook.db.session import get_db
from bouncehook.services.suppression import SuppressionReason

router = APIRouter(prefix="/suppression", tags=["suppression"])


class SuppressionResponse(BaseModel):
    id: int
    contact_id: int | None = None
    email: str
    channel: str
    channel_id: str | None = None
    reason: str
    comments: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


def _get_entry(db: Session, entry_id: int) -> models.SuppressionEntry:
    entry = db.query(models.SuppressionEntry).filter(models.SuppressionEntry.id == entry_id).first()
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Suppression not found")
    return entry


@router.get("/", response_model=list[SuppressionResponse])
def list_suppression(
    email: str | None = Query(default=None),
    reason: SuppressionReason | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[SuppressionResponse]:
    """List suppression entries optionally filtered by address or reason."""

    query = db.query(models.SuppressionEntry)
    if email is not None:
        query = query.filter(func.lower(models.SuppressionEntry.email) == email.lower())
    if reason is not None:
        query = query.filter(models.SuppressionEntry.reason == reason.value)
    entries = query.order_by(models.SuppressionEntry.id.desc()).all()
    return [SuppressionResponse.model_validate(entry) for entry in entries]


@router.get("/{entry_id}", response_model=SuppressionResponse)
def get_suppression(entry_id: int, db: Session = Depends(get_db)) -> SuppressionResponse:
    """Get a single suppression entry."""

    return SuppressionResponse.model_validate(_get_entry(db, entry_id))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remove_suppression(entry_id: int, db: Session = Depends(get_db)) -> Response:
    """Remove an entry from the suppression list."""

    entry = _get_entry(db, entry_id)
    db.delete(entry)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
