"""Integration tests for adapter implementations.

SQLite tests run against temporary database files; PostgreSQL tests
mock asyncpg so no server is required.
"""
