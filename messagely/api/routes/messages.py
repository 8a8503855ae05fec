"""Message endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from messagely.core.dependencies import get_current_username, get_db
from messagely.schemas.message import (
    MessageCreate,
    MessageDetail,
    MessageDetailResponse,
    MessageRead,
    MessageReadReceipt,
    MessageReadReceiptResponse,
    MessageResponse,
)
from messagely.services import messages as message_service

router = APIRouter(prefix="/messages", tags=["messages"])

# Ids outside SQLite's signed 64-bit INTEGER range cannot exist in the store.
MAX_MESSAGE_ID = 2**63 - 1


@router.get("/{message_id}", response_model=MessageDetailResponse)
async def get_message(
    message_id: int = Path(..., ge=1, le=MAX_MESSAGE_ID),
    session: AsyncSession = Depends(get_db),
    caller: str = Depends(get_current_username),
) -> MessageDetailResponse:
    message = await message_service.get_message(session, message_id, caller)
    return MessageDetailResponse(message=MessageDetail.model_validate(message))


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    payload: MessageCreate,
    session: AsyncSession = Depends(get_db),
    caller: str = Depends(get_current_username),
) -> MessageResponse:
    message = await message_service.create_message(session, caller, payload)
    await session.commit()
    return MessageResponse(message=MessageRead.model_validate(message))


@router.post("/{message_id}/read", response_model=MessageReadReceiptResponse)
async def mark_message_read(
    message_id: int = Path(..., ge=1, le=MAX_MESSAGE_ID),
    session: AsyncSession = Depends(get_db),
    caller: str = Depends(get_current_username),
) -> MessageReadReceiptResponse:
    message = await message_service.mark_read(session, message_id, caller)
    await session.commit()
    return MessageReadReceiptResponse(message=MessageReadReceipt.model_validate(message))
