#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Authentication, session and penalty module.
#
"""
Authentication, session and penalty module.
"""

from .credentials import StoredCredential, compare, hash_passphrase
from .penalty_tracker import PenaltyTracker
from .session_store import Session, SessionStore
from .utils import parse_period

__all__ = [
    'StoredCredential',
    'compare',
    'hash_passphrase',
    'PenaltyTracker',
    'Session',
    'SessionStore',
    'parse_period'
]
