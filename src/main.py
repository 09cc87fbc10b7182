#!/usr/bin/env python3
"""
Scriptorium launcher
Starts the web API, creates the database schema, or adds a login account.
"""

import sys
import argparse
import getpass
import logging

from auth.credentials import hash_passphrase
from config import TableNames, get_config, merge_dicts
from Database import Database
from DatabaseCreator import DatabaseCreator
from infrastructure.step import FunctionStep
from infrastructure.transaction_sequencer import TransactionSequencer
from repositories.credential_repository import CredentialRepository


logger = logging.getLogger(__name__)


def add_user(db: Database, tables: TableNames, username: str, passphrase: str) -> int:
   """Insert a user and its credential row in one transaction."""
   salt, digest = hash_passphrase(passphrase)

   def insert(_previous, uow):
      repo = CredentialRepository(uow, users_table=tables.users, credentials_table=tables.credentials)
      return repo.insert_user(username, salt, digest)

   return TransactionSequencer(db).run([FunctionStep("insert user", insert)])


if __name__ == "__main__":
   parser = argparse.ArgumentParser(
      description='Scriptorium - blog and static page backend (uses cfg/config.yaml for defaults)',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
   Examples:
     python main.py --api --config cfg/config.yaml
     python main.py --setup --user root --password secret
     python main.py --add-user alice

   Note: Database credentials are read from the config file unless
      --user/--password are given.
      """
   )
   parser.add_argument('--config',
                       default=None,
                       help='Path to config file (default: $SCRIPTORIUM_CONFIG or cfg/config.yaml)')
   parser.add_argument('--user',
                       help='MySQL user (overrides config)')
   parser.add_argument('--password',
                       help='MySQL password (overrides config)')
   parser.add_argument('--setup',
                       action="store_true",
                       help='Create the database and its tables from the schema file')
   parser.add_argument('--add-user',
                       metavar='USERNAME',
                       help='Create a login account; the passphrase is prompted for')
   parser.add_argument('--api',
                       action="store_true",
                       help='Launch the web API server (FastAPI)')
   parser.add_argument('--host',
                       default='127.0.0.1',
                       help='API server host (default: 127.0.0.1)')
   parser.add_argument('--port',
                       type=int,
                       default=8000,
                       help='API server port (default: 8000)')

   args = parser.parse_args()

   config = get_config(args.config)
   overrides = {key: value for key, value in (('user', args.user), ('password', args.password)) if value}
   config = merge_dicts(config, {'database': overrides})
   db_config = config['database']

   log_level = str(config.get('logging', {}).get('level', 'info'))
   logging.basicConfig(
      level=log_level.upper(),
      format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
   )

   if args.api:
      import uvicorn
      from api.main import create_app

      logger.info("Starting API server on http://%s:%s (docs at /docs)", args.host, args.port)
      uvicorn.run(
         create_app(config),
         host=args.host,
         port=args.port,
         log_level=log_level.lower()
      )
      sys.exit(0)

   db = Database(
      host=db_config.get('host', 'localhost'),
      user=db_config.get('user', ''),
      password=db_config.get('password', ''),
      database_name=db_config.get('name', 'scriptorium'),
      port=db_config.get('port', 3306),
      pool_size=1
   )

   success = True
   if args.setup:
      sql_file = db_config.get('sql_file', './db/schema.sql')
      logger.info("Using SQL file: %s", sql_file)
      try:
         success = DatabaseCreator(db).create_from_file(sql_file)
      except RuntimeError as e:
         logger.error("Error: %s", e)
         success = False

   if args.add_user:
      passphrase = getpass.getpass(f"Passphrase for {args.add_user}: ")
      if not db.connect():
         logger.error("Failed to connect to database")
         sys.exit(1)
      try:
         user_id = add_user(db, TableNames.from_config(config), args.add_user, passphrase)
         logger.info("Created user %s (id %s)", args.add_user, user_id)
      except Exception as e:
         logger.error("Error creating user: %s", e)
         success = False
      finally:
         db.close()

   if not (args.setup or args.add_user):
      parser.print_help()

   sys.exit(0 if success else 1)
