from datetime import datetime
from typing import Optional

from infrastructure.step import StepResult
from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors


class BlogRepository(BaseRepository):
   """Blog posts: a header row in the index table referencing a body row in the content table."""

   def __init__(self, uow_or_cursor, index_table: str = "blog_pages", content_table: str = "page_content"):
      super().__init__(uow_or_cursor)
      self.index_table = index_table
      self.content_table = content_table

   @handle_repository_errors("blog list")
   def list_headers(self) -> list[dict]:
      """
      Get all blog headers ordered by creation time.

      Returns:
         List of dicts with 'id', 'title', 'subtitle', 'tag', 'created', 'updated'
      """
      sql = (
         f"SELECT a.id, a.title, a.subtitle, a.tag, b.created, b.updated "
         f"FROM {self.index_table} AS a INNER JOIN {self.content_table} AS b "
         f"ON a.content_id = b.id ORDER BY b.created, a.id"
      )
      self.cursor.execute(sql)
      return [
         {"id": row[0], "title": row[1], "subtitle": row[2], "tag": row[3], "created": row[4], "updated": row[5]}
         for row in self.cursor.fetchall()
      ]

   @handle_repository_errors("blog fetch")
   def get_post(self, blog_id: int) -> Optional[dict]:
      """
      Get one blog post including its body.

      Args:
         blog_id: ID of the index row

      Returns:
         Dict with header fields and 'body', or None if not found
      """
      sql = (
         f"SELECT a.id, a.title, a.subtitle, a.tag, b.body, b.created, b.updated "
         f"FROM {self.index_table} AS a INNER JOIN {self.content_table} AS b "
         f"ON a.content_id = b.id WHERE a.id = %s"
      )
      self.cursor.execute(sql, (blog_id,))
      row = self.cursor.fetchone()
      if not row:
         return None
      return {
         "id": row[0], "title": row[1], "subtitle": row[2], "tag": row[3],
         "body": row[4], "created": row[5], "updated": row[6],
      }

   @handle_repository_errors("blog index insert")
   def insert_index(self, content_id: int, title: str, subtitle: str, tag: str) -> StepResult:
      sql = f"INSERT INTO {self.index_table} (title, subtitle, tag, content_id) VALUES (%s, %s, %s, %s)"
      self.cursor.execute(sql, (title, subtitle, tag, content_id))
      return StepResult.from_cursor(self.cursor)

   @handle_repository_errors("blog update")
   def update_post(self, blog_id: int, title: str, subtitle: str, tag: str, body: str, timestamp: datetime) -> StepResult:
      """Update header and body in one statement spanning both tables."""
      sql = (
         f"UPDATE {self.index_table} AS a INNER JOIN {self.content_table} AS b ON a.content_id = b.id "
         f"SET a.title = %s, a.subtitle = %s, a.tag = %s, b.updated = %s, b.body = %s "
         f"WHERE a.id = %s"
      )
      self.cursor.execute(sql, (title, subtitle, tag, timestamp, body, blog_id))
      return StepResult.from_cursor(self.cursor)

   @handle_repository_errors("blog delete")
   def delete_post(self, blog_id: int) -> StepResult:
      """Delete header and body in one statement spanning both tables."""
      sql = (
         f"DELETE a, b FROM {self.index_table} AS a INNER JOIN {self.content_table} AS b "
         f"ON a.content_id = b.id WHERE a.id = %s"
      )
      self.cursor.execute(sql, (blog_id,))
      return StepResult.from_cursor(self.cursor)
