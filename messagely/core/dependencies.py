"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from messagely.core.exceptions import Unauthenticated
from messagely.core.security import PasswordHasher, TokenSigner
from messagely.db.session import get_session

_bearer = HTTPBearer(auto_error=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with get_session(request.app.state.session_factory) as session:
        yield session


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


async def get_current_username(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    signer: TokenSigner = Depends(get_token_signer),
) -> str:
    """Resolve the caller's username from the ``Authorization: Bearer`` header."""

    if not credentials or not credentials.credentials:
        raise Unauthenticated()
    return signer.verify_token(credentials.credentials)
