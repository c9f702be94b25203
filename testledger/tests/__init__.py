"""Test suite for the testledger result recorder.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - Tests against real or mocked databases
   - Validates adapter behavior and error handling

3. fakes/: Port implementations for testing
   - In-memory TestResultStorePort and recording visitors
   - Used by core unit tests
"""
