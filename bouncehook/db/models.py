"""Database models for contacts, sends and the suppression list."""
from __future__ import annotations

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import declarative_base, relationship

from bouncehook.utils.datetime import utcnow

Base = declarative_base()


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(320), nullable=False, index=True)
    first_name = Column(String(120), nullable=True)
    last_name = Column(String(120), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    send_records = relationship("SendRecord", back_populates="contact")
    suppressions = relationship("SuppressionEntry", back_populates="contact", cascade="all, delete-orphan")


class Email(Base):
    """An outbound email (campaign or template); the scoped suppression channel."""

    __tablename__ = "emails"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    send_records = relationship("SendRecord", back_populates="email")


class SendRecord(Base):
    """A single delivery of an email to one address."""

    __tablename__ = "send_records"

    id = Column(Integer, primary_key=True)
    email_id = Column(Integer, ForeignKey("emails.id"), nullable=True)
    contact_id = Column(Integer, ForeignKey("contacts.id"), nullable=True)
    email_address = Column(String(320), nullable=False, index=True)
    tracking_hash = Column(String(255), nullable=False, index=True)
    is_failed = Column(Boolean, default=False, nullable=False)
    details = Column(JSON, nullable=True)
    date_sent = Column(DateTime(timezone=True), default=utcnow)

    email = relationship("Email", back_populates="send_records")
    contact = relationship("Contact", back_populates="send_records")


class SuppressionEntry(Base):
    """Do-not-contact flag. A null channel_id means the global email channel."""

    __tablename__ = "suppression_entries"

    id = Column(Integer, primary_key=True)
    contact_id = Column(Integer, ForeignKey("contacts.id"), nullable=True, index=True)
    email = Column(String(320), nullable=False, index=True)
    channel = Column(String(50), nullable=False, default="email")
    channel_id = Column(String(255), nullable=True)
    reason = Column(String(50), nullable=False)
    comments = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    contact = relationship("Contact", back_populates="suppressions")
