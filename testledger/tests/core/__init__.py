"""Unit tests for core domain logic.

These tests exercise core logic without external dependencies.
All external ports are replaced with in-memory fakes from tests/fakes/.
"""
