"""GIGCAL test suite.

Folder taxonomy
- unit/         : One module, class or function at a time, in process memory.
- contract/     : Behaviour every adapter of a port shares (memory, SQLite, PostgreSQL).
- integration/  : Migrations, units of work and wiring against real databases.
- e2e/          : The ``gigcal`` command driven through click's CliRunner.
- fixtures/     : Shared pytest fixtures (no tests here).

General guidance
- Keep unit tests fast and deterministic; prefer the in-memory adapters to mocks.
- Contract tests parametrize the backend and assert only the public port.
- PostgreSQL tests start a throwaway container and skip when Docker is unavailable.
- Each test is marked after its top-level folder (see ``conftest.py``).
"""
