"""Unit tests: domain rules, handlers, iCal rendering and CLI helpers.

Everything runs against the in-memory adapters or a ``:memory:`` SQLite
engine; nothing here needs Docker or the network.
"""
