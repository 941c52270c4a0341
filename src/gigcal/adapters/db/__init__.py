"""SQLAlchemy plumbing: engine factory, metadata, schema and migrations."""
