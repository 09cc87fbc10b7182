#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Steps writing static pages.
#
from infrastructure.step import Step, StepResult
from repositories.static_page_repository import StaticPageRepository
from services.write_steps.content import require_content_id


class InsertStaticIndexStep(Step):
   def __init__(self, page_name: str, index_table: str = "static_pages", content_table: str = "page_content"):
      self.page_name = page_name
      self.index_table = index_table
      self.content_table = content_table

   def name(self) -> str:
      return "insert static index"

   def run(self, previous, uow) -> StepResult:
      content_id = require_content_id(previous)
      repo = StaticPageRepository(uow, index_table=self.index_table, content_table=self.content_table)
      return repo.insert_index(content_id, self.page_name)
