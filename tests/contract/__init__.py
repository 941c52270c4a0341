"""Contract tests for the storage ports and their adapters.

Each test runs once per backend (memory, SQLite file, PostgreSQL) through the
``store_uow_factory`` fixture, so the adapters stay interchangeable. The
concurrency tests race admission and confirmation across threads.
"""
