"""Tests for the token authorization gate and security helpers."""

from datetime import timedelta

import pytest
from jose import jwt

from voteboard.core.errors import UnauthenticatedError
from voteboard.core.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from voteboard.core.settings import settings
from voteboard.services.auth import TokenAuthorizationGate


def test_resolve_valid_token() -> None:
    token = create_access_token(42)
    assert TokenAuthorizationGate().resolve(token) == 42


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_resolve_rejects_missing_or_garbage(token) -> None:
    with pytest.raises(UnauthenticatedError):
        TokenAuthorizationGate().resolve(token)


def test_resolve_rejects_expired_token() -> None:
    token = create_access_token(1, expires_delta=timedelta(seconds=-5))
    with pytest.raises(UnauthenticatedError):
        TokenAuthorizationGate().resolve(token)


def test_resolve_rejects_foreign_signature() -> None:
    token = create_access_token(1)
    with pytest.raises(UnauthenticatedError):
        TokenAuthorizationGate(secret_key="some-other-secret").resolve(token)


def test_resolve_rejects_non_integer_subject() -> None:
    token = jwt.encode({"sub": "alice"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(UnauthenticatedError):
        TokenAuthorizationGate().resolve(token)


def test_resolve_rejects_missing_subject() -> None:
    token = jwt.encode({"foo": "bar"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(UnauthenticatedError):
        TokenAuthorizationGate().resolve(token)


def test_actor_id_or_none() -> None:
    gate = TokenAuthorizationGate()
    assert gate.actor_id_or_none(create_access_token(7)) == 7
    assert gate.actor_id_or_none("garbage") is None
    assert gate.actor_id_or_none(None) is None


def test_password_hash_round_trip() -> None:
    hashed = hash_password("correct horse")
    assert hashed.startswith("$2b$")
    assert verify_password("correct horse", hashed) is True
    assert verify_password("wrong horse", hashed) is False


def test_password_hashes_are_salted() -> None:
    assert hash_password("same") != hash_password("same")


def test_verify_password_malformed_hash() -> None:
    assert verify_password("anything", "not-a-hash") is False
