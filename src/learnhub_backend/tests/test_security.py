import pytest
from datetime import timedelta

from learnhub_backend.api.exceptions import UnauthorizedException
from learnhub_backend.auth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_malformed_hash_never_verifies():
    assert not verify_password("secret123", "not-a-hash")


def test_token_carries_user_and_role():
    payload = decode_access_token(create_access_token("u1", "instructor"))

    assert payload.sub == "u1"
    assert payload.role == "instructor"


def test_expired_token_is_rejected():
    token = create_access_token("u1", "student", expires_delta=timedelta(minutes=-5))

    with pytest.raises(UnauthorizedException):
        decode_access_token(token)


def test_tampered_token_is_rejected():
    token = create_access_token("u1", "student")

    with pytest.raises(UnauthorizedException):
        decode_access_token(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))
