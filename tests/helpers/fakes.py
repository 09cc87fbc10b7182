#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: SQLite stand-in for the MySQL pool used by API and unit tests.
#
"""
File-backed SQLite store exposing the slice of the mysql-connector API the
application uses: ``connection()``, ``start_transaction``, ``commit``,
``rollback`` and cursors with ``%s`` placeholders.

Multi-table UPDATE/DELETE syntax is MySQL only; those paths are covered by
the integration tests against a live server.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime


SCHEMA = """
CREATE TABLE users (
   id INTEGER PRIMARY KEY AUTOINCREMENT,
   username TEXT NOT NULL UNIQUE
);
CREATE TABLE credentials (
   user_id INTEGER PRIMARY KEY REFERENCES users (id),
   hash BLOB NOT NULL,
   salt BLOB NOT NULL
);
CREATE TABLE page_content (
   id INTEGER PRIMARY KEY AUTOINCREMENT,
   created TEXT NOT NULL,
   updated TEXT NOT NULL,
   body TEXT NOT NULL
);
CREATE TABLE blog_pages (
   id INTEGER PRIMARY KEY AUTOINCREMENT,
   title TEXT NOT NULL UNIQUE,
   subtitle TEXT NOT NULL DEFAULT '',
   tag TEXT NOT NULL DEFAULT '',
   content_id INTEGER NOT NULL UNIQUE
);
CREATE TABLE static_pages (
   id INTEGER PRIMARY KEY AUTOINCREMENT,
   url_hash BLOB NOT NULL UNIQUE,
   content_id INTEGER NOT NULL UNIQUE
);
"""

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _adapt(value):
   if isinstance(value, datetime):
      return value.strftime(TIME_FORMAT)
   return value


class SqliteCursor:
   def __init__(self, cursor: sqlite3.Cursor):
      self._cursor = cursor

   def execute(self, sql: str, params=()):
      self._cursor.execute(sql.replace("%s", "?"), tuple(_adapt(p) for p in params))

   def fetchone(self):
      return self._cursor.fetchone()

   def fetchall(self):
      return self._cursor.fetchall()

   @property
   def lastrowid(self):
      return self._cursor.lastrowid

   @property
   def rowcount(self):
      return self._cursor.rowcount

   def close(self):
      self._cursor.close()


class SqliteConnection:
   def __init__(self, path: str):
      self._conn = sqlite3.connect(path, isolation_level=None, check_same_thread=False, timeout=5)
      self._conn.execute("PRAGMA foreign_keys = ON")

   def cursor(self) -> SqliteCursor:
      return SqliteCursor(self._conn.cursor())

   def start_transaction(self):
      self._conn.execute("BEGIN")

   def commit(self):
      if self._conn.in_transaction:
         self._conn.execute("COMMIT")

   def rollback(self):
      if self._conn.in_transaction:
         self._conn.execute("ROLLBACK")

   def close(self):
      self._conn.close()


class BrokenRollbackConnection(SqliteConnection):
   def rollback(self):
      raise sqlite3.OperationalError("connection lost during rollback")


class SqliteDatabase:
   """Drop-in replacement for Database backed by one SQLite file."""

   connection_class = SqliteConnection

   def __init__(self, path):
      self.path = str(path)
      self.connected = True
      self.acquired = 0
      self.released = 0
      self.timeouts = []

   def create_schema(self) -> None:
      with sqlite3.connect(self.path) as conn:
         conn.executescript(SCHEMA)

   def connect(self, use_database: bool = True) -> bool:
      self.connected = True
      return True

   def close(self) -> None:
      self.connected = False

   def is_connected(self) -> bool:
      return self.connected

   @contextmanager
   def connection(self, timeout_seconds=None):
      self.acquired += 1
      self.timeouts.append(timeout_seconds)
      conn = self.connection_class(self.path)
      try:
         yield conn
      finally:
         conn.close()
         self.released += 1

   def query(self, sql: str, params=()) -> list:
      """Read committed rows directly, bypassing the application."""
      with sqlite3.connect(self.path) as conn:
         return conn.execute(sql, params).fetchall()

   def count(self, table: str) -> int:
      return self.query(f"SELECT COUNT(*) FROM {table}")[0][0]


class BrokenRollbackDatabase(SqliteDatabase):
   connection_class = BrokenRollbackConnection
