import hashlib
from typing import Optional

from infrastructure.step import StepResult
from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors


def url_hash(name: str) -> bytes:
   """Index key of a static page: the raw MD5 digest of its name."""
   return hashlib.md5(name.encode("utf-8")).digest()


class StaticPageRepository(BaseRepository):
   """Static pages addressed by name; the index row stores the name's digest."""

   def __init__(self, uow_or_cursor, index_table: str = "static_pages", content_table: str = "page_content"):
      super().__init__(uow_or_cursor)
      self.index_table = index_table
      self.content_table = content_table

   @handle_repository_errors("static page fetch")
   def get_page(self, name: str) -> Optional[dict]:
      """
      Get a static page by name.

      Returns:
         Dict with 'body', 'created', 'updated', or None if not found
      """
      sql = (
         f"SELECT a.body, a.created, a.updated FROM {self.content_table} AS a "
         f"INNER JOIN {self.index_table} AS b ON a.id = b.content_id "
         f"WHERE b.url_hash = %s"
      )
      self.cursor.execute(sql, (url_hash(name),))
      row = self.cursor.fetchone()
      if not row:
         return None
      return {"body": row[0], "created": row[1], "updated": row[2]}

   @handle_repository_errors("static index insert")
   def insert_index(self, content_id: int, name: str) -> StepResult:
      sql = f"INSERT INTO {self.index_table} (url_hash, content_id) VALUES (%s, %s)"
      self.cursor.execute(sql, (url_hash(name), content_id))
      return StepResult.from_cursor(self.cursor)
