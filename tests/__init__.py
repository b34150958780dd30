"""
GraphQL Marshaller Test Suite.

This package contains:
- conftest.py: Shared live schemas (hello, star wars)
- unit/: Unit tests (no external services)
"""
