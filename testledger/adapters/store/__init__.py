"""Test result store adapters.

Implementations support multiple backends:
- SQLite (zero-config, single-file)
- PostgreSQL (shared result database)
"""
