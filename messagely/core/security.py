"""Security helpers for password hashing and identity token signing."""
from __future__ import annotations

from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import Settings, get_settings
from .exceptions import InvalidToken


class PasswordHasher:
    """Hash and verify user passwords using Argon2id with a configurable work factor."""

    def __init__(self, time_cost: int | None = None) -> None:
        if time_cost is None:
            time_cost = get_settings().password_time_cost
        self._context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__time_cost=time_cost,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._context.verify(password, hashed)

    def dummy_verify(self) -> bool:
        return self._context.dummy_verify()


class TokenSigner:
    """Sign and unsign identity tokens asserting a username."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self._serializer = URLSafeTimedSerializer(settings.secret_key, salt=settings.token_salt)
        expire = settings.access_token_expire_minutes
        self._max_age = expire * 60 if expire else None

    def dumps(self, data: dict[str, Any]) -> str:
        return self._serializer.dumps(data)

    def loads(self, token: str) -> dict[str, Any]:
        try:
            return self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired as exc:
            raise InvalidToken("Token expired") from exc
        except BadSignature as exc:
            raise InvalidToken() from exc

    def issue_token(self, username: str) -> str:
        return self.dumps({"sub": username})

    def verify_token(self, token: str) -> str:
        """Return the username a token asserts, or raise InvalidToken."""

        payload = self.loads(token)
        username = payload.get("sub") if isinstance(payload, dict) else None
        if not isinstance(username, str) or not username:
            raise InvalidToken()
        return username
