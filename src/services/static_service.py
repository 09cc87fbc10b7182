#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Static page reads and sequenced writes.
#
from config import TableNames
from domain.errors import NotFoundError
from domain.request_context import RequestContext
from infrastructure.connection_executor import ConnectionExecutor
from infrastructure.step import FunctionStep
from infrastructure.transaction_sequencer import TransactionSequencer
from repositories.static_page_repository import StaticPageRepository
from services.blog_service import utc_timestamp
from services.write_steps.content import InsertContentStep
from services.write_steps.static import InsertStaticIndexStep


class StaticPageService:
   def __init__(self, sequencer: TransactionSequencer, executor: ConnectionExecutor, tables: TableNames):
      self.sequencer = sequencer
      self.executor = executor
      self.tables = tables

   def get_page(self, name: str, context: RequestContext) -> dict:
      """
      Raises:
         NotFoundError: No page with this name
      """
      def fetch(_previous, scope):
         repo = StaticPageRepository(scope, index_table=self.tables.static_index, content_table=self.tables.content)
         return repo.get_page(name)

      page = self.executor.run(FunctionStep("get static page", fetch), context)
      if page is None:
         raise NotFoundError(f"Page {name} not found")
      return page

   def create_page(self, name: str, body: str, context: RequestContext) -> dict:
      timestamp = utc_timestamp()
      self.sequencer.run(
         [
            InsertContentStep(body, timestamp, content_table=self.tables.content),
            InsertStaticIndexStep(name, index_table=self.tables.static_index, content_table=self.tables.content),
         ],
         context,
      )
      return {"name": name, "body": body, "created": timestamp, "updated": timestamp}
