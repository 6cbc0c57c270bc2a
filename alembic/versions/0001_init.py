"""init

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-01 00:00:00.000000
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=True),
        sa.Column("last_name", sa.String(length=120), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contacts_id", "contacts", ["id"], unique=False)
    op.create_index("ix_contacts_email", "contacts", ["email"], unique=False)

    op.create_table(
        "emails",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "send_records",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email_id", sa.Integer(), nullable=True),
        sa.Column("contact_id", sa.Integer(), nullable=True),
        sa.Column("email_address", sa.String(length=320), nullable=False),
        sa.Column("tracking_hash", sa.String(length=255), nullable=False),
        sa.Column("is_failed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("date_sent", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["email_id"], ["emails.id"]),
        sa.ForeignKeyConstraint(["contact_id"], ["contacts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_send_records_email_address", "send_records", ["email_address"], unique=False)
    op.create_index("ix_send_records_tracking_hash", "send_records", ["tracking_hash"], unique=False)

    op.create_table(
        "suppression_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("contact_id", sa.Integer(), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("channel", sa.String(length=50), nullable=False),
        sa.Column("channel_id", sa.String(length=255), nullable=True),
        sa.Column("reason", sa.String(length=50), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.ForeignKeyConstraint(["contact_id"], ["contacts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_suppression_entries_contact_id", "suppression_entries", ["contact_id"], unique=False)
    op.create_index("ix_suppression_entries_email", "suppression_entries", ["email"], unique=False)


def downgrade():
    op.drop_index("ix_suppression_entries_email", table_name="suppression_entries")
    op.drop_index("ix_suppression_entries_contact_id", table_name="suppression_entries")
    op.drop_table("suppression_entries")
    op.drop_index("ix_send_records_tracking_hash", table_name="send_records")
    op.drop_index("ix_send_records_email_address", table_name="send_records")
    op.drop_table("send_records")
    op.drop_table("emails")
    op.drop_index("ix_contacts_email", table_name="contacts")
    op.drop_index("ix_contacts_id", table_name="contacts")
    op.drop_table("contacts")
