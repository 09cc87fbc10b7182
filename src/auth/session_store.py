"""
In-memory session store for time-boxed login sessions.
"""

import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from auth.sharding import ShardedMap
from auth.utils import parse_period
from domain.errors import DomainError, InfrastructureError, UnauthorizedError, ValidationError


logger = logging.getLogger(__name__)

SECRET_BYTES = 32

# Compared against when no session exists so lookups take the same path
_ABSENT_SECRET = "0" * (SECRET_BYTES * 2)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Session:
    """Time-boxed proof of authentication for one identity from one origin."""
    origin: str
    identity: str
    secret: str
    issued: datetime
    expiration: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expiration


class SessionStore:
    """
    In-memory session store keyed by (origin, identity).

    Issues a session after successful credential verification and answers
    the authorization guard for mutating endpoints. Sessions expire at
    their fixed expiration time and are never persisted.
    """

    def __init__(
        self,
        max_period: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
        shard_count: int = 32,
    ):
        """
        Initializes the session store.

        Args:
            max_period: Upper bound for requested session periods (default: 24h)
            clock: Returns the current time (timezone-aware)
            shard_count: Number of lock stripes
        """
        self.max_period = max_period
        self.clock = clock
        self.sessions = ShardedMap(shard_count)

    def _resolve_period(self, period) -> timedelta:
        if not isinstance(period, timedelta):
            period = parse_period(period)
        if period <= timedelta(0):
            raise ValidationError("Session period must be positive")
        return min(period, self.max_period)

    def authenticate(
        self,
        origin: str,
        identity: str,
        period,
        verify: Callable[[], bool],
    ) -> Optional[Session]:
        """
        Verifies credentials and issues a new session.

        The caller checks the penalty gate before calling this and updates
        it afterwards; this method never touches penalty state.

        Args:
            origin: Client origin identifier
            identity: Login identity (username)
            period: Requested session period (duration string or timedelta)
            verify: Performs the credential lookup and comparison

        Returns:
            The new Session, or None if the credentials did not match

        Raises:
            ValidationError: Invalid period
            InfrastructureError: verify() failed for a reason other than a mismatch
        """
        period = self._resolve_period(period)

        try:
            matched = verify()
        except DomainError:
            raise
        except Exception as exc:
            logger.exception("Credential verification failed for %s", identity)
            raise InfrastructureError(f"Credential verification failed: {exc}") from exc

        if not matched:
            return None

        now = self.clock()
        session = Session(
            origin=origin,
            identity=identity,
            secret=secrets.token_hex(SECRET_BYTES),
            issued=now,
            expiration=now + period,
        )

        key = (origin, identity)
        with self.sessions.locked(key) as shard:
            shard[key] = session

        logger.info("Session issued for %s from %s until %s", identity, origin, session.expiration)
        return session

    def authorized(self, origin: str, identity: str, secret: str) -> None:
        """
        Guards mutating calls.

        Args:
            origin: Client origin identifier
            identity: Claimed identity
            secret: Presented session secret

        Raises:
            UnauthorizedError: No session, mismatched secret, or session expired
        """
        key = (origin, identity)
        with self.sessions.locked(key) as shard:
            session = shard.get(key)

        expected = session.secret if session else _ABSENT_SECRET
        matches = hmac.compare_digest(expected.encode("ascii"), (secret or "").encode("utf-8"))

        if session is None or not matches:
            raise UnauthorizedError()

        if session.is_expired(self.clock()):
            self.invalidate(origin, identity)
            raise UnauthorizedError("Session expired")

    def invalidate(self, origin: str, identity: str) -> bool:
        """
        Removes the session for (origin, identity).

        Returns:
            True if a session was removed
        """
        key = (origin, identity)
        with self.sessions.locked(key) as shard:
            return shard.pop(key, None) is not None

    def get_session(self, origin: str, identity: str) -> Optional[Session]:
        key = (origin, identity)
        with self.sessions.locked(key) as shard:
            return shard.get(key)

    def cleanup_expired_sessions(self) -> int:
        """
        Removes expired sessions.

        Returns:
            Number of removed sessions
        """
        now = self.clock()
        removed = self.sessions.sweep(lambda _key, session: session.is_expired(now))
        if removed:
            logger.debug("Removed %d expired sessions", removed)
        return removed

    def get_session_count(self) -> int:
        """Returns the number of stored sessions."""
        return self.sessions.count()
