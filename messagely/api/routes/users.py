"""User directory endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from messagely.core.dependencies import get_current_username, get_db
from messagely.core.exceptions import Forbidden
from messagely.schemas.message import (
    ReceivedMessage,
    ReceivedMessagesResponse,
    SentMessage,
    SentMessagesResponse,
)
from messagely.schemas.user import UserDetail, UserDetailResponse, UserListResponse, UserSummary
from messagely.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


def _ensure_same_user(caller: str, username: str) -> None:
    if caller != username:
        raise Forbidden("Only that user may view their messages")


@router.get("", response_model=UserListResponse)
async def list_users(
    session: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_username),
) -> UserListResponse:
    users = await user_service.list_users(session)
    return UserListResponse(users=[UserSummary.model_validate(user) for user in users])


@router.get("/{username}", response_model=UserDetailResponse)
async def get_user(
    username: str,
    session: AsyncSession = Depends(get_db),
    _: str = Depends(get_current_username),
) -> UserDetailResponse:
    user = await user_service.get_user(session, username)
    return UserDetailResponse(user=UserDetail.model_validate(user))


@router.get("/{username}/to", response_model=ReceivedMessagesResponse)
async def get_messages_to(
    username: str,
    session: AsyncSession = Depends(get_db),
    caller: str = Depends(get_current_username),
) -> ReceivedMessagesResponse:
    _ensure_same_user(caller, username)
    messages = await user_service.messages_to(session, username)
    return ReceivedMessagesResponse(messages=[ReceivedMessage.model_validate(m) for m in messages])


@router.get("/{username}/from", response_model=SentMessagesResponse)
async def get_messages_from(
    username: str,
    session: AsyncSession = Depends(get_db),
    caller: str = Depends(get_current_username),
) -> SentMessagesResponse:
    _ensure_same_user(caller, username)
    messages = await user_service.messages_from(session, username)
    return SentMessagesResponse(messages=[SentMessage.model_validate(m) for m in messages])
