"""The ``MetaData`` every GIGCAL table is declared on.

Constraint and index names follow ``NAMING_CONVENTION`` so that tables built
with ``metadata.create_all()`` in tests and tables built by the Alembic
migrations carry the same names, e.g. ``ix_bookings_artist_id_event_date`` or
``ck_availability_blocks_ordered_range``.
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
