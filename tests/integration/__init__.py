"""Integration tests against real databases.

Alembic migrations upgrade and downgrade cleanly, the SQL unit of work commits
and rolls back as documented, and ``bootstrap`` wires a working application.
"""
