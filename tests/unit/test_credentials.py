"""
Unit tests for passphrase hashing and comparison.
"""

import logging

import pytest

from auth.credentials import KEY_BYTES, SALT_BYTES, compare, hash_passphrase


pytestmark = pytest.mark.auth
logger = logging.getLogger(__name__)


def test_hash_passphrase_generates_salt_and_hash():
    salt, digest = hash_passphrase("hunter2")
    assert len(salt) == SALT_BYTES
    assert len(digest) == KEY_BYTES
    logger.info("✓ Salt and hash have the stored sizes")


def test_same_salt_gives_same_hash():
    salt, first = hash_passphrase("hunter2")
    _, second = hash_passphrase("hunter2", salt=salt)
    assert first == second


def test_random_salts_differ():
    first_salt, first = hash_passphrase("hunter2")
    second_salt, second = hash_passphrase("hunter2")
    assert first_salt != second_salt
    assert first != second


def test_compare_accepts_matching_passphrase():
    salt, digest = hash_passphrase("hunter2")
    assert compare("hunter2", salt, digest) is True
    logger.info("✓ Matching passphrase accepted")


@pytest.mark.parametrize("presented", ["hunter3", "", "HUNTER2", "hunter2 "])
def test_compare_rejects_other_passphrases(presented):
    salt, digest = hash_passphrase("hunter2")
    assert compare(presented, salt, digest) is False


def test_compare_accepts_bytearray_from_driver():
    salt, digest = hash_passphrase("hunter2")
    assert compare("hunter2", bytes(salt), bytearray(digest)) is True
