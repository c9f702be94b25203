"""External adapters for the testledger result recorder.

This package contains all external dependencies (SQLite, PostgreSQL)
and provides implementations of the core port interfaces.

Adapter Organization:

- store/: Adapters for test result persistence (SQLite, PostgreSQL)
"""
