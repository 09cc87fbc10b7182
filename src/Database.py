import logging
import math
import time
from contextlib import contextmanager

import mysql.connector.pooling
from mysql.connector import Error
from mysql.connector.constants import ClientFlag
from mysql.connector.errors import PoolError

from domain.errors import DeadlineExceededError, InfrastructureError


logger = logging.getLogger(__name__)

ACQUIRE_RETRY_SECONDS = 0.05


class Database:
   """MySQL connection pool shared by all requests; one connection per unit of work."""

   def __init__(self, host: str, user: str, password: str, database_name: str, port: int = 3306,
                pool_size: int = 10, connect_timeout: int = 5):
      """
      Initialize database connection parameters.

      Args:
         host: MySQL server host address
         user: Database user
         password: Database password
         database_name: Name of the database
         port: MySQL server port (default: 3306)
         pool_size: Pooled connections (default: 10)
         connect_timeout: Seconds to wait for the server when connecting
      """
      self.host = host
      self.user = user
      self.password = password
      self.database_name = database_name
      self.port = port
      self.pool_size = pool_size
      self.connect_timeout = connect_timeout
      self.pool = None

   def connect(self, use_database: bool = True) -> bool:
      """
      Create the connection pool.

      Args:
         use_database: If True, connect to specific database; if False, connect to server only.

      Returns:
         True on success, False otherwise.
      """
      self.close()
      try:
         self.pool = mysql.connector.pooling.MySQLConnectionPool(
            pool_name=f"scriptorium_{self.database_name}"[:64],
            pool_size=self.pool_size if use_database else 1,
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            database=self.database_name if use_database else None,
            connection_timeout=self.connect_timeout,
            autocommit=True,  # single statements commit on their own; transactions are begun explicitly
            use_pure=True,
            # UPDATE reports matched rows, so an unchanged post is still found
            client_flags=[ClientFlag.FOUND_ROWS],
            pool_reset_session=True,
         )
         logger.info("Connection pool ready for %s:%s (%s connections)", self.host, self.port, self.pool.pool_size)
         return True
      except Error as e:
         logger.error("Error connecting to MySQL: %s", e)
         self.pool = None
         return False

   def close(self) -> None:
      """Close the idle pooled connections and drop the pool."""
      if self.pool is not None:
         pool, self.pool = self.pool, None
         try:
            closed = pool._remove_connections()
         except Error as e:
            logger.warning("Error closing pooled connections: %s", e)
            closed = 0
         logger.info("Database connection pool closed (%s idle connections)", closed)

   def is_connected(self) -> bool:
      """Check if the connection pool exists."""
      return self.pool is not None

   def _acquire(self, timeout_seconds: float | None):
      deadline = None if timeout_seconds is None else time.monotonic() + timeout_seconds
      while True:
         try:
            return self.pool.get_connection()
         except PoolError:
            # Pool exhausted; wait for a connection to be returned
            if deadline is not None and time.monotonic() >= deadline:
               raise DeadlineExceededError("Deadline exceeded waiting for a database connection")
            if deadline is None:
               raise
            time.sleep(ACQUIRE_RETRY_SECONDS)

   def _bound_statements(self, conn, timeout_seconds: float) -> None:
      """
      Limit how long statements on this connection may run.

      max_execution_time only covers read-only SELECTs; writes blocked on a
      row lock are bounded by innodb_lock_wait_timeout (whole seconds).
      Both session values are reset when the connection returns to the pool.
      """
      settings = (
         ("max_execution_time", max(1, int(timeout_seconds * 1000))),
         ("innodb_lock_wait_timeout", max(1, math.ceil(timeout_seconds))),
      )
      cursor = conn.cursor()
      try:
         for variable, value in settings:
            try:
               cursor.execute(f"SET SESSION {variable} = %s", (value,))
            except Error as e:
               # MariaDB and old MySQL servers lack max_execution_time
               logger.debug("Could not set %s: %s", variable, e)
      finally:
         cursor.close()

   @contextmanager
   def connection(self, timeout_seconds: float | None = None):
      """
      Borrow a pooled connection for the duration of the block.

      The connection always goes back to the pool, on success and failure.

      Args:
         timeout_seconds: Remaining request time; bounds waiting for a
            connection and the execution time of each statement.

      Raises:
         InfrastructureError: Pool missing or no connection obtainable
         DeadlineExceededError: Deadline passed while waiting for a connection
      """
      if self.pool is None:
         raise InfrastructureError("Database not connected")

      try:
         conn = self._acquire(timeout_seconds)
      except InfrastructureError:
         raise
      except Error as e:
         logger.error("Could not obtain database connection: %s", e)
         raise InfrastructureError(f"Could not obtain database connection: {e}") from e

      try:
         if timeout_seconds is not None:
            self._bound_statements(conn, timeout_seconds)
         yield conn
      finally:
         try:
            conn.close()
         except Error as e:
            logger.warning("Error returning connection to pool: %s", e)
