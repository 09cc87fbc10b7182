from typing import Optional

from auth.credentials import StoredCredential
from repositories.base import BaseRepository
from repositories.error_handling import handle_repository_errors


class CredentialRepository(BaseRepository):
   def __init__(self, uow_or_cursor, users_table: str = "users", credentials_table: str = "credentials"):
      super().__init__(uow_or_cursor)
      self.users_table = users_table
      self.credentials_table = credentials_table

   @handle_repository_errors("credential lookup")
   def get_stored_credential(self, username: str) -> Optional[StoredCredential]:
      """
      Load the stored hash and salt for a username.

      Args:
         username: Login identity

      Returns:
         StoredCredential, or None if no account exists
      """
      sql = (
         f"SELECT b.hash, b.salt FROM {self.users_table} AS a "
         f"INNER JOIN {self.credentials_table} AS b ON a.id = b.user_id "
         f"WHERE a.username = %s"
      )
      self.cursor.execute(sql, (username,))
      row = self.cursor.fetchone()
      if not row:
         return None
      return StoredCredential(hash=bytes(row[0]), salt=bytes(row[1]))

   @handle_repository_errors("credential insert")
   def insert_user(self, username: str, salt: bytes, hash: bytes) -> int:
      """
      Create a user row and its credential row.

      Returns:
         The new user ID
      """
      self.cursor.execute(f"INSERT INTO {self.users_table} (username) VALUES (%s)", (username,))
      user_id = self.cursor.lastrowid
      self.cursor.execute(
         f"INSERT INTO {self.credentials_table} (user_id, hash, salt) VALUES (%s, %s, %s)",
         (user_id, hash, salt),
      )
      return user_id
