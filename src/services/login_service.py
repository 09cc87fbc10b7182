#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Login flow combining the penalty gate, verification and sessions.
#
"""
Login flow combining the penalty gate, credential verification and sessions.
"""

import logging

from auth.credentials import compare, hash_passphrase
from auth.penalty_tracker import PenaltyTracker
from auth.session_store import Session, SessionStore
from config import TableNames
from domain.errors import ThrottledError, UnauthorizedError
from domain.request_context import RequestContext
from infrastructure.connection_executor import ConnectionExecutor
from infrastructure.step import FunctionStep
from repositories.credential_repository import CredentialRepository


logger = logging.getLogger(__name__)

# Compared against when the account does not exist, so a missing account
# costs the same key derivation as a wrong passphrase.
_DUMMY_SALT, _DUMMY_HASH = hash_passphrase("", salt=b"\x00" * 16)


class LoginService:
    def __init__(
        self,
        session_store: SessionStore,
        penalty_tracker: PenaltyTracker,
        executor: ConnectionExecutor,
        tables: TableNames,
    ):
        self.session_store = session_store
        self.penalty_tracker = penalty_tracker
        self.executor = executor
        self.tables = tables

    def _load_credential(self, userid: str, context: RequestContext):
        def lookup(_previous, scope):
            repo = CredentialRepository(
                scope,
                users_table=self.tables.users,
                credentials_table=self.tables.credentials,
            )
            return repo.get_stored_credential(userid)

        return self.executor.run(FunctionStep("credential lookup", lookup), context)

    def login(self, context: RequestContext, userid: str, passphrase: str, period) -> Session:
        """
        Authenticates a login request from context.origin.

        Args:
            context: Request context (origin, deadline)
            userid: Login identity
            passphrase: Presented passphrase
            period: Requested session period

        Returns:
            The issued Session

        Raises:
            ThrottledError: Origin is penalised; credentials were not consulted
            ValidationError: Invalid period
            UnauthorizedError: Bad credentials (origin is penalised afterwards)
            InfrastructureError: Credential store failure (penalty state untouched)
        """
        origin = context.origin

        if self.penalty_tracker.penalised(origin):
            logger.info("Login from penalised origin %s rejected", origin)
            raise ThrottledError()

        def verify() -> bool:
            stored = self._load_credential(userid, context)
            if stored is None:
                compare(passphrase, _DUMMY_SALT, _DUMMY_HASH)
                return False
            return compare(passphrase, stored.salt, stored.hash)

        self.session_store.cleanup_expired_sessions()
        session = self.session_store.authenticate(origin, userid, period, verify)

        if session is None:
            self.penalty_tracker.penalise(origin)
            raise UnauthorizedError("Bad credentials")

        self.penalty_tracker.clear(origin)
        return session

    def logout(self, context: RequestContext, username: str, secret: str) -> None:
        """
        Ends the caller's session.

        Raises:
            UnauthorizedError: No valid session for the caller
        """
        self.session_store.authorized(context.origin, username, secret)
        self.session_store.invalidate(context.origin, username)
