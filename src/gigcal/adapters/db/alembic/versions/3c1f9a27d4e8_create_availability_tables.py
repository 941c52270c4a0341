"""create availability, block, booking and artist lock tables

Revision ID: 3c1f9a27d4e8
Revises:
Create Date: 2026-10-18

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from gigcal.adapters.db.sa_types import BIGINT_PK, UTCDateTime, WeekdayList

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3c1f9a27d4e8"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "availability_entries",
        sa.Column("artist_id", sa.String(length=64), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "booking_id",
            sa.String(length=64),
            nullable=True,
            comment="Booking that owns a 'booked' slot.",
        ),
        sa.Column(
            "updated_at",
            UTCDateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.CheckConstraint(
            "status IN ('available', 'booked', 'unavailable')",
            name=op.f("ck_availability_entries_valid_status"),
        ),
        sa.PrimaryKeyConstraint(
            "artist_id", "date", name=op.f("pk_availability_entries")
        ),
        comment="Explicit availability status per artist and date.",
    )

    op.create_table(
        "availability_blocks",
        sa.Column(
            "seq",
            BIGINT_PK,
            sa.Identity(always=False, start=1),
            nullable=False,
            comment="Creation order.",
        ),
        sa.Column("block_id", sa.String(length=64), nullable=False),
        sa.Column("artist_id", sa.String(length=64), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("recurrence_pattern", sa.String(length=16), nullable=True),
        sa.Column("recurrence_end_date", sa.Date(), nullable=True),
        sa.Column("recurrence_days", WeekdayList(), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.CheckConstraint(
            "end_date >= start_date",
            name=op.f("ck_availability_blocks_ordered_range"),
        ),
        sa.CheckConstraint(
            "recurrence_pattern IS NULL OR "
            "recurrence_pattern IN ('daily', 'weekly', 'monthly')",
            name=op.f("ck_availability_blocks_valid_pattern"),
        ),
        sa.PrimaryKeyConstraint("seq", name=op.f("pk_availability_blocks")),
        sa.UniqueConstraint("block_id", name=op.f("uq_availability_blocks_block_id")),
        comment="Artist blackout blocks; deleted only by explicit artist action.",
    )
    op.create_index(
        op.f("ix_availability_blocks_artist_id_seq"),
        "availability_blocks",
        ["artist_id", "seq"],
    )

    op.create_table(
        "bookings",
        sa.Column("booking_id", sa.String(length=64), nullable=False),
        sa.Column("artist_id", sa.String(length=64), nullable=False),
        sa.Column("venue_id", sa.String(length=64), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("event_end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("payment_status", sa.String(length=16), nullable=False),
        sa.Column("event_time", sa.String(length=32), nullable=True),
        sa.Column("venue_name", sa.String(length=255), nullable=True),
        sa.Column("venue_address", sa.Text(), nullable=True),
        sa.Column("event_details", sa.Text(), nullable=True),
        sa.Column("total_fee", sa.Numeric(12, 2), nullable=True),
        sa.Column("deposit_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'cancelled', 'completed')",
            name=op.f("ck_bookings_valid_status"),
        ),
        sa.PrimaryKeyConstraint("booking_id", name=op.f("pk_bookings")),
        comment="Booking requests from venues to artists.",
    )
    op.create_index(
        op.f("ix_bookings_artist_id_event_date"), "bookings", ["artist_id", "event_date"]
    )
    op.create_index(
        op.f("ix_bookings_venue_id_event_date"), "bookings", ["venue_id", "event_date"]
    )

    op.create_table(
        "artist_locks",
        sa.Column("artist_id", sa.String(length=64), nullable=False),
        sa.Column("locked_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("artist_id", name=op.f("pk_artist_locks")),
        comment="Upserted at the start of a write to serialize work per artist.",
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("artist_locks")
    op.drop_index(op.f("ix_bookings_venue_id_event_date"), table_name="bookings")
    op.drop_index(op.f("ix_bookings_artist_id_event_date"), table_name="bookings")
    op.drop_table("bookings")
    op.drop_index(
        op.f("ix_availability_blocks_artist_id_seq"), table_name="availability_blocks"
    )
    op.drop_table("availability_blocks")
    op.drop_table("availability_entries")
