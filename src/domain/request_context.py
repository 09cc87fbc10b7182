#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Request-scoped data threaded explicitly through the core.
#
import time
from dataclasses import dataclass

from domain.errors import DeadlineExceededError, DomainError, InfrastructureError, RollbackError


@dataclass(frozen=True)
class RequestContext:
    """Origin address and monotonic deadline of one inbound request."""

    origin: str
    deadline: float

    @classmethod
    def with_timeout(cls, origin: str, seconds: float) -> "RequestContext":
        return cls(origin=origin, deadline=time.monotonic() + seconds)

    def remaining(self) -> float:
        """Seconds left before the deadline (never negative)."""
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.deadline

    def check(self, operation: str = "request") -> None:
        """
        Raise if the deadline has elapsed.

        Raises:
            DeadlineExceededError: Deadline already passed
        """
        if self.expired:
            raise DeadlineExceededError(f"Deadline exceeded during {operation}")

    def overran(self, exc: Exception) -> bool:
        """True if exc is a store failure that surfaced after the deadline passed."""
        if not self.expired or isinstance(exc, (DeadlineExceededError, RollbackError)):
            return False
        return isinstance(exc, InfrastructureError) or not isinstance(exc, DomainError)
