#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Passphrase hashing and constant-time credential comparison.
#
"""
Passphrase hashing and constant-time credential comparison.
"""

import hmac
import secrets
from dataclasses import dataclass

from cryptography.hazmat.primitives.kdf.scrypt import Scrypt


SALT_BYTES = 16
KEY_BYTES = 32
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1


@dataclass(frozen=True)
class StoredCredential:
    """Runtime view of a credential row, discarded after comparison."""
    hash: bytes
    salt: bytes


def _derive(passphrase: str, salt: bytes) -> bytes:
    kdf = Scrypt(salt=salt, length=KEY_BYTES, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)
    return kdf.derive(passphrase.encode("utf-8"))


def hash_passphrase(passphrase: str, salt: bytes | None = None) -> tuple[bytes, bytes]:
    """
    Derives the stored hash for a passphrase.

    Args:
        passphrase: Plain passphrase
        salt: Salt to use (random if omitted)

    Returns:
        Tuple (salt, hash)
    """
    if salt is None:
        salt = secrets.token_bytes(SALT_BYTES)
    return salt, _derive(passphrase, salt)


def compare(passphrase: str, salt: bytes, hash: bytes) -> bool:
    """
    Compares a presented passphrase against a stored salted hash.

    The comparison runs in constant time with respect to the hash contents.

    Args:
        passphrase: Presented passphrase
        salt: Stored salt
        hash: Stored hash

    Returns:
        True if the passphrase matches
    """
    return hmac.compare_digest(_derive(passphrase, salt), bytes(hash))
