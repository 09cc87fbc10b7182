#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Runs dependent write steps as one atomic transaction.
#
import logging
from typing import Any, Iterable, Optional

from domain.errors import DeadlineExceededError, DomainError, InfrastructureError
from domain.request_context import RequestContext
from infrastructure.step import as_step
from infrastructure.unit_of_work import UnitOfWork


logger = logging.getLogger(__name__)


class TransactionSequencer:
   """
   Executes an ordered chain of steps inside one transaction.

   Each step receives the result of the previous one (the first receives
   None). The first failing step aborts the chain and rolls everything
   back; the transaction commits only when every step succeeded.
   """

   def __init__(self, database):
      self.database = database

   def run(self, steps: Iterable, context: Optional[RequestContext] = None) -> Any:
      """
      Run the steps atomically.

      Args:
         steps: Ordered Steps or ``func(previous, uow)`` callables
         context: Request context whose deadline bounds the transaction

      Returns:
         Result of the last step (None for an empty sequence)

      Raises:
         DomainError: Raised by a step, passed through unchanged
         DeadlineExceededError: Deadline elapsed, before a step or while a
            statement was blocked; nothing was committed
         InfrastructureError: Any other failure, chained to its cause
      """
      steps = [as_step(step) for step in steps]
      if not steps:
         return None

      timeout = None
      if context is not None:
         context.check("transaction start")
         timeout = context.remaining()

      current = "begin"
      try:
         with self.database.connection(timeout) as conn:
            with UnitOfWork(conn) as uow:
               result = None
               for step in steps:
                  current = step.name()
                  if context is not None:
                     context.check(current)
                  result = step.run(result, uow)
               current = "commit"
               if context is not None:
                  context.check(current)
         return result
      except Exception as exc:
         if context is not None and context.overran(exc):
            logger.warning("Transaction at step '%s' overran its deadline: %s", current, exc)
            raise DeadlineExceededError(f"Deadline exceeded during {current}") from exc
         if isinstance(exc, DomainError):
            logger.warning("Transaction aborted at step '%s': %s", current, exc)
            raise
         logger.exception("Transaction failed at step '%s'", current)
         raise InfrastructureError(f"Transaction failed at step '{current}': {exc}") from exc
