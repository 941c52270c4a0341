"""Concrete adapters (in-memory and SQLAlchemy) for the GIGCAL ports."""
