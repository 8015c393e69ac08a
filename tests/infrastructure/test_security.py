"""Tests for password hashing and access-token verification."""

from __future__ import annotations

from datetime import timedelta

import pytest
from jose import jwt

from isle.infrastructure.security import (
    ALGORITHM,
    create_access_token,
    decode_access_token,
    get_password_hash,
    pwd_context,
)


def test_password_hash_verifies():
    hashed = get_password_hash("Secret123")

    assert hashed != "Secret123"
    assert pwd_context.verify("Secret123", hashed)
    assert not pwd_context.verify("wrong", hashed)


def test_token_subject_is_the_user_id():
    payload = decode_access_token(create_access_token(42))

    assert payload["sub"] == "42"


def test_expired_and_foreign_tokens_are_rejected():
    expired = create_access_token(1, expires_delta=timedelta(minutes=-1))
    foreign = jwt.encode({"sub": "1"}, "another-secret", algorithm=ALGORITHM)

    with pytest.raises(ValueError):
        decode_access_token(expired)
    with pytest.raises(ValueError):
        decode_access_token(foreign)
