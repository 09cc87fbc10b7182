class BaseRepository:
   def __init__(self, uow_or_cursor):
      """Initialize repository with a UnitOfWork, a statement scope, or a raw DB cursor.

      Args:
         uow_or_cursor: Object exposing ``.cursor`` (UnitOfWork, StatementScope) or a raw DB cursor
      """
      if hasattr(uow_or_cursor, "cursor") and not callable(uow_or_cursor.cursor):
         # UnitOfWork or statement scope
         self.uow = uow_or_cursor
         self.cursor = uow_or_cursor.cursor
      else:
         # Raw cursor passed directly
         self.uow = None
         self.cursor = uow_or_cursor
