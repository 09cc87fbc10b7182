#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Steps writing blog posts.
#
import logging
from datetime import datetime

from domain.errors import InfrastructureError, NotFoundError
from infrastructure.step import Step, StepResult
from repositories.blog_repository import BlogRepository
from services.write_steps.content import require_content_id


logger = logging.getLogger(__name__)

# A post is one index row plus one content row
ROWS_PER_POST = 2


class InsertBlogIndexStep(Step):
   def __init__(self, title: str, subtitle: str, tag: str, index_table: str = "blog_pages", content_table: str = "page_content"):
      self.title = title
      self.subtitle = subtitle
      self.tag = tag
      self.index_table = index_table
      self.content_table = content_table

   def name(self) -> str:
      return "insert blog index"

   def run(self, previous, uow) -> StepResult:
      content_id = require_content_id(previous)
      repo = BlogRepository(uow, index_table=self.index_table, content_table=self.content_table)
      return repo.insert_index(content_id, self.title, self.subtitle, self.tag)


class UpdateBlogPostStep(Step):
   def __init__(self, blog_id: int, title: str, subtitle: str, tag: str, body: str, timestamp: datetime,
                index_table: str = "blog_pages", content_table: str = "page_content"):
      self.blog_id = blog_id
      self.title = title
      self.subtitle = subtitle
      self.tag = tag
      self.body = body
      self.timestamp = timestamp
      self.index_table = index_table
      self.content_table = content_table

   def name(self) -> str:
      return "update blog post"

   def run(self, previous, uow) -> StepResult:
      repo = BlogRepository(uow, index_table=self.index_table, content_table=self.content_table)
      result = repo.update_post(self.blog_id, self.title, self.subtitle, self.tag, self.body, self.timestamp)
      if result.rows_affected == 0:
         raise NotFoundError(f"Blog {self.blog_id} not found")
      return result


class DeleteBlogPostStep(Step):
   def __init__(self, blog_id: int, index_table: str = "blog_pages", content_table: str = "page_content"):
      self.blog_id = blog_id
      self.index_table = index_table
      self.content_table = content_table

   def name(self) -> str:
      return "delete blog post"

   def run(self, previous, uow) -> StepResult:
      repo = BlogRepository(uow, index_table=self.index_table, content_table=self.content_table)
      result = repo.delete_post(self.blog_id)
      if result.rows_affected == 0:
         raise NotFoundError(f"Blog {self.blog_id} not found")
      if result.rows_affected != ROWS_PER_POST:
         logger.error("Delete of blog %s affected %d rows", self.blog_id, result.rows_affected)
         raise InfrastructureError(
            f"Unexpected database result (expected {ROWS_PER_POST} rows affected, got {result.rows_affected})"
         )
      return result
