#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Step inserting a content body row.
#
from datetime import datetime

from infrastructure.step import Step, StepResult
from repositories.content_repository import ContentRepository


class InsertContentStep(Step):
   def __init__(self, body: str, timestamp: datetime, content_table: str = "page_content"):
      self.body = body
      self.timestamp = timestamp
      self.content_table = content_table

   def name(self) -> str:
      return "insert content"

   def run(self, previous, uow) -> StepResult:
      repo = ContentRepository(uow, content_table=self.content_table)
      return repo.insert_content(self.body, self.timestamp)


def require_content_id(previous) -> int:
   """Content ID generated by the preceding InsertContentStep."""
   if not isinstance(previous, StepResult) or previous.last_insert_id is None:
      raise ValueError("Preceding step did not yield a content ID")
   return previous.last_insert_id
