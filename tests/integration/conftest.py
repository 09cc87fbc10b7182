"""
Fixtures for tests against a live MySQL server.

Configured through DB_TEST_HOST, DB_TEST_PORT, DB_TEST_USER,
DB_TEST_PASSWORD and DB_TEST_NAME (e.g. in .env.test); every test here is
skipped when DB_TEST_HOST is unset.
"""

import logging
import os
from pathlib import Path

import pytest

from config import TableNames, merge_config
from Database import Database
from DatabaseCreator import DatabaseCreator


logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).parent.parent.parent / "db" / "schema.sql"


def _test_database() -> Database:
    return Database(
        host=os.getenv("DB_TEST_HOST"),
        user=os.getenv("DB_TEST_USER", "root"),
        password=os.getenv("DB_TEST_PASSWORD", ""),
        database_name=os.getenv("DB_TEST_NAME", "scriptorium_test"),
        port=int(os.getenv("DB_TEST_PORT", "3306")),
        pool_size=4,
    )


@pytest.fixture(scope="session")
def mysql_schema():
    if not os.getenv("DB_TEST_HOST"):
        pytest.skip("DB_TEST_HOST not set; live MySQL tests skipped")
    db = _test_database()
    if not DatabaseCreator(db).create_from_file(str(SCHEMA_FILE)):
        pytest.fail("Could not create test schema")
    logger.info("✓ Test schema ready in %s", db.database_name)
    return db


@pytest.fixture
def mysql_db(mysql_schema):
    """Connected pool over empty tables."""
    db = _test_database()
    assert db.connect(), "Failed to connect to test database"
    tables = TableNames.from_config(merge_config())
    with db.connection() as conn:
        cursor = conn.cursor()
        try:
            for table in (tables.blog_index, tables.static_index, tables.content, tables.credentials, tables.users):
                cursor.execute(f"DELETE FROM {table}")
        finally:
            cursor.close()
    yield db
    db.close()


@pytest.fixture
def mysql_tables() -> TableNames:
    return TableNames.from_config(merge_config())
