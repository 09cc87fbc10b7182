from datetime import datetime

from infrastructure.step import StepResult
from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors


class ContentRepository(BaseRepository):
   """Body rows shared by blog posts and static pages."""

   def __init__(self, uow_or_cursor, content_table: str = "page_content"):
      super().__init__(uow_or_cursor)
      self.content_table = content_table

   @handle_repository_errors("content insert")
   def insert_content(self, body: str, timestamp: datetime) -> StepResult:
      """
      Insert a content row.

      Returns:
         StepResult whose last_insert_id is the new content ID
      """
      sql = f"INSERT INTO {self.content_table} (created, updated, body) VALUES (%s, %s, %s)"
      self.cursor.execute(sql, (timestamp, timestamp, body))
      return StepResult.from_cursor(self.cursor)
