"""Relational schema for the availability core.

| Table                  | Key                    | Holds                                   |
|------------------------|------------------------|-----------------------------------------|
| availability_entries   | (artist_id, date)      | explicit per-date calendar status       |
| availability_blocks    | seq, UNIQUE(block_id)  | one-off and recurring blackout blocks   |
| bookings               | booking_id             | booking requests and their lifecycle    |
| artist_locks           | artist_id              | one row per artist, upserted to lock it |

``availability_blocks.seq`` preserves creation order independently of the id
format. Migrations live in ``gigcal.adapters.db.alembic``.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    Identity,
    Index,
    Numeric,
    String,
    Table,
    Text,
    text,
)

from gigcal.adapters.db.metadata import metadata
from gigcal.adapters.db.sa_types import BIGINT_PK, UTCDateTime, WeekdayList

__all__ = ["artist_locks", "availability_blocks", "availability_entries", "bookings"]

ID_LENGTH = 64

availability_entries = Table(
    "availability_entries",
    metadata,
    Column("artist_id", String(ID_LENGTH), primary_key=True),
    Column("date", Date, primary_key=True),
    Column("status", String(16), nullable=False),
    Column("notes", Text, nullable=True),
    Column(
        "booking_id",
        String(ID_LENGTH),
        nullable=True,
        comment="Booking that owns a 'booked' slot.",
    ),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    CheckConstraint(
        "status IN ('available', 'booked', 'unavailable')", name="valid_status"
    ),
    comment="Explicit availability status per artist and date.",
)

availability_blocks = Table(
    "availability_blocks",
    metadata,
    Column(
        "seq",
        BIGINT_PK,
        Identity(start=1),
        primary_key=True,
        comment="Creation order.",
    ),
    Column("block_id", String(ID_LENGTH), nullable=False, unique=True),
    Column("artist_id", String(ID_LENGTH), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("reason", Text, nullable=False),
    Column("recurrence_pattern", String(16), nullable=True),
    Column("recurrence_end_date", Date, nullable=True),
    Column("recurrence_days", WeekdayList(), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    CheckConstraint("end_date >= start_date", name="ordered_range"),
    CheckConstraint(
        "recurrence_pattern IS NULL OR "
        "recurrence_pattern IN ('daily', 'weekly', 'monthly')",
        name="valid_pattern",
    ),
    Index(None, "artist_id", "seq"),
    comment="Artist blackout blocks; deleted only by explicit artist action.",
)

bookings = Table(
    "bookings",
    metadata,
    Column("booking_id", String(ID_LENGTH), primary_key=True),
    Column("artist_id", String(ID_LENGTH), nullable=False),
    Column("venue_id", String(ID_LENGTH), nullable=False),
    Column("event_date", Date, nullable=False),
    Column("event_end_date", Date, nullable=True),
    Column("status", String(16), nullable=False),
    Column("payment_status", String(16), nullable=False),
    Column("event_time", String(32), nullable=True),
    Column("venue_name", String(255), nullable=True),
    Column("venue_address", Text, nullable=True),
    Column("event_details", Text, nullable=True),
    Column("total_fee", Numeric(12, 2), nullable=True),
    Column("deposit_amount", Numeric(12, 2), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    CheckConstraint(
        "status IN ('pending', 'confirmed', 'cancelled', 'completed')",
        name="valid_status",
    ),
    Index(None, "artist_id", "event_date"),
    Index(None, "venue_id", "event_date"),
    comment="Booking requests from venues to artists.",
)

artist_locks = Table(
    "artist_locks",
    metadata,
    Column("artist_id", String(ID_LENGTH), primary_key=True),
    Column("locked_at", UTCDateTime(), nullable=False),
    comment="Upserted at the start of a write to serialize work per artist.",
)
