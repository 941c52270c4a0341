"""Alembic environment for the GIGCAL schema.

The URL comes from ``-x url=...``, then the ``sqlalchemy.url`` main option set
by ``gigcal.config.build_alembic_config``, then ``GIGCAL_DB_URL``. Online runs
go through ``make_engine`` so SQLite migrations see the same PRAGMAs as the
application, and use batch mode because SQLite cannot ALTER constraints.
"""

from alembic import context

# Importing the schema registers every table on ``metadata``.
import gigcal.adapters.db.schema  # noqa: F401 # pylint: disable=unused-import
from gigcal import config as gigcal_config
from gigcal.adapters.db.engine import is_sqlite, make_engine
from gigcal.adapters.db.metadata import metadata

# pylint: disable=no-member

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def resolve_url() -> str:
    """Database URL for this run; raises DatabaseUrlNotSetError if none."""
    url = context.get_x_argument(as_dictionary=True).get("url")
    url = url or context.config.get_main_option(gigcal_config.ALEMBIC_URL_KEY)
    return url or gigcal_config.get_db_url()


def run_migrations_offline(url: str) -> None:
    """Write the migration SQL to the configured output instead of executing it."""
    context.configure(
        url=url,
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    engine = make_engine(url)
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=metadata,
                render_as_batch=is_sqlite(url),
                **COMPARE_OPTIONS,
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline(resolve_url())
else:
    run_migrations_online(resolve_url())
