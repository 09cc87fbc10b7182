"""
Pytest configuration and shared fixtures for the Scriptorium test suite.

This module provides:
- A file-backed SQLite store standing in for the MySQL pool
- A seeded login account
- API clients built from the application factory
- Session helpers for authorized requests
"""

import logging
from pathlib import Path
from typing import Any, Dict

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

from api.main import create_app
from config import TableNames, merge_config
from main import add_user
from tests.helpers.client import TEST_PASSPHRASE, TEST_USER, login
from tests.helpers.fakes import SqliteDatabase

# Load test environment (DB_TEST_* for the integration tests)
env_file = Path(__file__).parent.parent / ".env.test"
if env_file.exists():
    load_dotenv(env_file)
else:
    load_dotenv()

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============================================================================
# DATA STORE
# ============================================================================

@pytest.fixture
def tables() -> TableNames:
    return TableNames.from_config(merge_config())


@pytest.fixture
def sqlite_db(tmp_path) -> SqliteDatabase:
    """Empty schema in a per-test SQLite file."""
    db = SqliteDatabase(tmp_path / "scriptorium.db")
    db.create_schema()
    return db


@pytest.fixture
def seeded_db(sqlite_db, tables) -> SqliteDatabase:
    """Schema with one login account."""
    add_user(sqlite_db, tables, TEST_USER, TEST_PASSPHRASE)
    logger.info("Seeded account %s", TEST_USER)
    return sqlite_db


# ============================================================================
# API CLIENT
# ============================================================================

@pytest.fixture
def app_config() -> Dict[str, Any]:
    """Overrides on top of the built-in defaults; tests may mutate before requesting `app`."""
    return {"auth": {"max_session_period": "24h", "failures_before_penalty": 1}}


@pytest.fixture
def app(seeded_db, app_config):
    return create_app(app_config, database=seeded_db)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def app_context(app):
    return app.state.app_context


@pytest.fixture
def session(client) -> Dict[str, str]:
    """Logged-in session for the seeded account."""
    response = login(client)
    assert response.status_code == 200, response.text
    return {"username": TEST_USER, "secret": response.json()["secret"]}
