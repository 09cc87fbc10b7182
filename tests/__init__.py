"""
Scriptorium Test Suite.

This package contains all test modules organized by test type:
- unit/ - Unit tests for auth state, transactions and write steps
- api/ - API tests against an in-process app backed by SQLite
- integration/ - Tests against a live MySQL server (DB_TEST_* variables)
- helpers/ - Test doubles and request helpers
- data/ - Test data factories
"""
