#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Per-origin login penalties.
#
"""
Per-origin login penalties.
"""

import logging

from auth.sharding import ShardedMap


logger = logging.getLogger(__name__)


class PenaltyTracker:
    """
    Brute-force protection for login.

    Blocks an origin (network address) after failed login attempts. A
    penalised origin stays blocked for every identity until a successful
    login or an explicit clear; there is no time-based decay.
    """

    def __init__(self, failures_before_penalty: int = 1, shard_count: int = 32):
        """
        Initializes the penalty tracker.

        Args:
            failures_before_penalty: Consecutive failures that close the gate
                (default: 1, a plain binary gate)
            shard_count: Number of lock stripes
        """
        if failures_before_penalty < 1:
            raise ValueError("failures_before_penalty must be at least 1")
        self.failures_before_penalty = failures_before_penalty
        self._strikes = ShardedMap(shard_count)

    def penalised(self, origin: str) -> bool:
        """
        Checks whether an origin is blocked from attempting login.

        Args:
            origin: Client origin identifier

        Returns:
            True if login attempts from this origin must be rejected
        """
        with self._strikes.locked(origin) as shard:
            return shard.get(origin, 0) >= self.failures_before_penalty

    def penalise(self, origin: str) -> None:
        """
        Records a failed attempt for an origin.

        With the default threshold this sets the blocked flag; repeating it
        has no further effect.

        Args:
            origin: Client origin identifier
        """
        with self._strikes.locked(origin) as shard:
            strikes = min(shard.get(origin, 0) + 1, self.failures_before_penalty)
            shard[origin] = strikes
        if strikes >= self.failures_before_penalty:
            logger.warning("Origin %s penalised after failed login", origin)

    def clear(self, origin: str) -> None:
        """
        Removes any penalty for an origin.

        Args:
            origin: Client origin identifier
        """
        with self._strikes.locked(origin) as shard:
            shard.pop(origin, None)

    def get_penalised_count(self) -> int:
        """Returns the number of currently blocked origins."""
        return self._strikes.count(lambda _origin, strikes: strikes >= self.failures_before_penalty)
