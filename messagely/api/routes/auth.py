"""Authentication endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from messagely.core.dependencies import get_db, get_password_hasher, get_token_signer
from messagely.core.exceptions import InvalidCredentials
from messagely.core.security import PasswordHasher, TokenSigner
from messagely.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from messagely.services.users import authenticate, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> TokenResponse:
    result = await authenticate(session, payload.username, payload.password, hasher)
    if not result:
        # Unknown user, wrong password and store outages all look alike to the caller.
        raise InvalidCredentials()

    await session.commit()
    return TokenResponse(token=signer.issue_token(payload.username))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> TokenResponse:
    user = await register_user(session, payload, hasher)
    await session.commit()
    return TokenResponse(token=signer.issue_token(user.username))
