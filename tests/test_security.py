"""Tests for password hashing and identity tokens."""
from __future__ import annotations

import time

import pytest
from itsdangerous import TimestampSigner, URLSafeTimedSerializer

from messagely.core.config import Settings
from messagely.core.exceptions import InvalidToken
from messagely.core.security import PasswordHasher, TokenSigner


def test_hash_is_salted_and_verifies() -> None:
    hasher = PasswordHasher(time_cost=1)
    first = hasher.hash("correct horse")
    second = hasher.hash("correct horse")

    assert first != "correct horse"
    assert first.startswith("$argon2")
    assert first != second
    assert hasher.verify("correct horse", first)
    assert not hasher.verify("wrong horse", first)


def test_work_factor_is_configurable() -> None:
    hashed = PasswordHasher(time_cost=3).hash("pw")
    assert "t=3" in hashed


def test_token_round_trips_username(signer: TokenSigner) -> None:
    token = signer.issue_token("alice")
    assert signer.verify_token(token) == "alice"


def test_token_from_other_secret_is_rejected(signer: TokenSigner, settings: Settings) -> None:
    other = TokenSigner(settings.model_copy(update={"secret_key": "someone-else"}))
    with pytest.raises(InvalidToken):
        signer.verify_token(other.issue_token("alice"))


def test_tampered_token_is_rejected(signer: TokenSigner) -> None:
    token = signer.issue_token("alice")
    with pytest.raises(InvalidToken):
        signer.verify_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))


def test_token_without_subject_is_rejected(signer: TokenSigner, settings: Settings) -> None:
    serializer = URLSafeTimedSerializer(settings.secret_key, salt=settings.token_salt)
    with pytest.raises(InvalidToken):
        signer.verify_token(serializer.dumps({"username": "alice"}))
    with pytest.raises(InvalidToken):
        signer.verify_token(serializer.dumps(["alice"]))


def test_tokens_do_not_expire_by_default(signer: TokenSigner, monkeypatch) -> None:
    with monkeypatch.context() as m:
        m.setattr(TimestampSigner, "get_timestamp", lambda self: int(time.time()) - 365 * 24 * 3600)
        token = signer.issue_token("alice")
    assert signer.verify_token(token) == "alice"


def test_expired_token_is_rejected_when_expiry_configured(settings: Settings, monkeypatch) -> None:
    signer = TokenSigner(settings.model_copy(update={"access_token_expire_minutes": 5}))
    with monkeypatch.context() as m:
        m.setattr(TimestampSigner, "get_timestamp", lambda self: int(time.time()) - 3600)
        token = signer.issue_token("alice")
    with pytest.raises(InvalidToken, match="expired"):
        signer.verify_token(token)
