"""Alembic migration environment for GIGCAL (see ``gigcal.config.build_alembic_config``)."""
