#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Lock-striped in-memory map for shared auth state.
#
"""
Lock-striped in-memory map for shared auth state.
"""

import threading
from contextlib import contextmanager
from typing import Any, Dict, Hashable, Iterator, List


class ShardedMap:
    """
    Dictionary split into shards, each guarded by its own lock.

    All access to a key goes through the shard that owns it, so operations
    on one key are serialized while keys on different shards never contend.
    """

    def __init__(self, shard_count: int = 32):
        """
        Initializes the map.

        Args:
            shard_count: Number of independent shards (default: 32)
        """
        if shard_count < 1:
            raise ValueError("shard_count must be positive")
        self._locks = [threading.Lock() for _ in range(shard_count)]
        self._shards: List[Dict[Hashable, Any]] = [{} for _ in range(shard_count)]

    def _index(self, key: Hashable) -> int:
        return hash(key) % len(self._shards)

    @contextmanager
    def locked(self, key: Hashable) -> Iterator[Dict[Hashable, Any]]:
        """
        Holds the lock of the shard owning ``key`` for the duration of the block.

        Yields:
            The shard dictionary; read and mutate ``key`` through it
        """
        index = self._index(key)
        with self._locks[index]:
            yield self._shards[index]

    def sweep(self, predicate) -> int:
        """
        Removes all entries for which ``predicate(key, value)`` is true.

        Shards are locked one at a time.

        Returns:
            Number of removed entries
        """
        removed = 0
        for lock, shard in zip(self._locks, self._shards):
            with lock:
                doomed = [key for key, value in shard.items() if predicate(key, value)]
                for key in doomed:
                    del shard[key]
                removed += len(doomed)
        return removed

    def count(self, predicate=None) -> int:
        total = 0
        for lock, shard in zip(self._locks, self._shards):
            with lock:
                if predicate is None:
                    total += len(shard)
                else:
                    total += sum(1 for key, value in shard.items() if predicate(key, value))
        return total
