from contextlib import AbstractContextManager

from domain.errors import RollbackError


class UnitOfWork(AbstractContextManager):
   def __init__(self, connection):
      self.connection = connection
      self._cursor = None

   def __enter__(self):
      self.connection.start_transaction()
      self._cursor = self.connection.cursor()
      return self

   @property
   def cursor(self):
      return self._cursor

   def commit(self):
      self.connection.commit()

   def rollback(self):
      self.connection.rollback()

   def __exit__(self, exc_type, exc, tb):
      try:
         if exc:
            try:
               self.rollback()
            except Exception as rollback_exc:
               # Chained to the step error so neither is lost
               raise RollbackError(f"Rollback failed after {exc!r}: {rollback_exc}") from exc
         else:
            self.commit()
      finally:
         if self._cursor:
            self._cursor.close()
