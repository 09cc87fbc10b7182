#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Blog post reads and sequenced writes.
#
from datetime import datetime, timezone

from config import TableNames
from domain.errors import NotFoundError
from domain.request_context import RequestContext
from infrastructure.connection_executor import ConnectionExecutor
from infrastructure.step import FunctionStep
from infrastructure.transaction_sequencer import TransactionSequencer
from repositories.blog_repository import BlogRepository
from services.write_steps.blog import DeleteBlogPostStep, InsertBlogIndexStep, UpdateBlogPostStep
from services.write_steps.content import InsertContentStep


def utc_timestamp() -> datetime:
   """Current UTC time without tzinfo or sub-second part, as stored in DATETIME columns."""
   return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


class BlogService:
   def __init__(self, sequencer: TransactionSequencer, executor: ConnectionExecutor, tables: TableNames):
      self.sequencer = sequencer
      self.executor = executor
      self.tables = tables

   def _repo(self, scope) -> BlogRepository:
      return BlogRepository(scope, index_table=self.tables.blog_index, content_table=self.tables.content)

   def list_posts(self, context: RequestContext) -> list[dict]:
      step = FunctionStep("list blog headers", lambda _previous, scope: self._repo(scope).list_headers())
      return self.executor.run(step, context)

   def get_post(self, blog_id: int, context: RequestContext) -> dict:
      """
      Raises:
         NotFoundError: No post with this ID
      """
      step = FunctionStep("get blog post", lambda _previous, scope: self._repo(scope).get_post(blog_id))
      post = self.executor.run(step, context)
      if post is None:
         raise NotFoundError(f"Blog {blog_id} not found")
      return post

   def create_post(self, title: str, subtitle: str, tag: str, body: str, context: RequestContext) -> dict:
      """
      Insert content and index rows atomically.

      Returns:
         The created post including its new ID and timestamps
      """
      timestamp = utc_timestamp()
      result = self.sequencer.run(
         [
            InsertContentStep(body, timestamp, content_table=self.tables.content),
            InsertBlogIndexStep(title, subtitle, tag, index_table=self.tables.blog_index, content_table=self.tables.content),
         ],
         context,
      )
      return {
         "id": result.last_insert_id,
         "title": title,
         "subtitle": subtitle,
         "tag": tag,
         "body": body,
         "created": timestamp,
         "updated": timestamp,
      }

   def update_post(self, blog_id: int, title: str, subtitle: str, tag: str, body: str, context: RequestContext) -> dict:
      timestamp = utc_timestamp()
      self.executor.run(
         UpdateBlogPostStep(
            blog_id, title, subtitle, tag, body, timestamp,
            index_table=self.tables.blog_index, content_table=self.tables.content,
         ),
         context,
      )
      return {
         "id": blog_id,
         "title": title,
         "subtitle": subtitle,
         "tag": tag,
         "body": body,
         "updated": timestamp,
      }

   def delete_post(self, blog_id: int, context: RequestContext) -> None:
      self.executor.run(
         DeleteBlogPostStep(blog_id, index_table=self.tables.blog_index, content_table=self.tables.content),
         context,
      )
