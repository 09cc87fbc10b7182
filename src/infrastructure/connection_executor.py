#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Runs a single statement-level-atomic step without a transaction.
#
import logging
from contextlib import AbstractContextManager
from typing import Any, Optional

from domain.errors import DeadlineExceededError, DomainError, InfrastructureError
from domain.request_context import RequestContext
from infrastructure.step import as_step


logger = logging.getLogger(__name__)


class StatementScope(AbstractContextManager):
   """Cursor holder for autocommit statements; no begin, commit or rollback."""

   def __init__(self, connection):
      self.connection = connection
      self._cursor = None

   def __enter__(self):
      self._cursor = self.connection.cursor()
      return self

   @property
   def cursor(self):
      return self._cursor

   def __exit__(self, exc_type, exc, tb):
      if self._cursor:
         self._cursor.close()


class ConnectionExecutor:
   """Executes exactly one step on an autocommit connection."""

   def __init__(self, database):
      self.database = database

   def run(self, step, context: Optional[RequestContext] = None) -> Any:
      """
      Run one step; it receives None as its previous result.

      Raises:
         DomainError: Raised by the step, passed through unchanged
         DeadlineExceededError: Deadline elapsed before or while the statement ran
         InfrastructureError: Any other failure, chained to its cause
      """
      step = as_step(step)

      timeout = None
      if context is not None:
         context.check(step.name())
         timeout = context.remaining()

      try:
         with self.database.connection(timeout) as conn:
            with StatementScope(conn) as scope:
               return step.run(None, scope)
      except Exception as exc:
         if context is not None and context.overran(exc):
            logger.warning("Statement '%s' overran its deadline: %s", step.name(), exc)
            raise DeadlineExceededError(f"Deadline exceeded during {step.name()}") from exc
         if isinstance(exc, DomainError):
            logger.warning("Statement '%s' rejected: %s", step.name(), exc)
            raise
         logger.exception("Statement '%s' failed", step.name())
         raise InfrastructureError(f"Statement '{step.name()}' failed: {exc}") from exc
