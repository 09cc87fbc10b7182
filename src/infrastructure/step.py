#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Unit of data-mutating work run by the sequencer or executor.
#
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class StepResult:
   """Outcome of one executed statement, handed to the next step."""
   last_insert_id: Optional[int]
   rows_affected: int

   @classmethod
   def from_cursor(cls, cursor) -> "StepResult":
      last_insert_id = cursor.lastrowid
      return cls(
         last_insert_id=last_insert_id if last_insert_id else None,
         rows_affected=cursor.rowcount,
      )


class Step(ABC):
   @abstractmethod
   def name(self) -> str: ...

   @abstractmethod
   def run(self, previous: Any, uow) -> Any: ...


class FunctionStep(Step):
   """Adapts a plain ``func(previous, uow)`` callable to a Step."""

   def __init__(self, name: str, func: Callable[[Any, Any], Any]):
      self._name = name
      self._func = func

   def name(self) -> str:
      return self._name

   def run(self, previous: Any, uow) -> Any:
      return self._func(previous, uow)


def as_step(step) -> Step:
   if isinstance(step, Step):
      return step
   if callable(step):
      return FunctionStep(getattr(step, "__name__", "step"), step)
   raise TypeError(f"Not a step: {step!r}")
