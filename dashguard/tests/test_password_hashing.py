from __future__ import annotations

import hashlib
import re

from dashguard.application.services.password_hashing import Pbkdf2PasswordHasher

HEX_128 = re.compile(r"^[0-9a-f]{128}$")


def test_hash_matches_pbkdf2_sha512_over_hex_salt_text() -> None:
    hasher = Pbkdf2PasswordHasher()
    salt = "00112233445566778899aabbccddeeff"

    expected = hashlib.pbkdf2_hmac("sha512", b"admin", salt.encode(), 10000, 64).hex()

    assert hasher.hash("admin", salt) == expected
    assert HEX_128.match(expected)


def test_generate_salt_is_random_hex() -> None:
    hasher = Pbkdf2PasswordHasher()

    first, second = hasher.generate_salt(), hasher.generate_salt()

    assert re.fullmatch(r"[0-9a-f]{32}", first)
    assert first != second


def test_same_password_different_salt_differs() -> None:
    hasher = Pbkdf2PasswordHasher(iterations=1000)

    assert hasher.hash("secret", "aa" * 16) != hasher.hash("secret", "bb" * 16)


def test_verify() -> None:
    hasher = Pbkdf2PasswordHasher(iterations=1000)
    salt = hasher.generate_salt()
    hashed = hasher.hash("secret", salt)

    assert hasher.verify("secret", salt, hashed)
    assert not hasher.verify("Secret", salt, hashed)
    assert not hasher.verify("secret", hasher.generate_salt(), hashed)
    assert not hasher.verify("secret", salt, "")
