"""Pydantic schemas for the message ledger and per-user message views."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserSummary


class MessageCreate(BaseModel):
    # The sender is always the authenticated caller, so it is not accepted here.
    to_username: str = Field(..., min_length=1, max_length=64)
    body: str = Field(..., min_length=1)


class MessageRead(BaseModel):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageDetail(BaseModel):
    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None = None
    from_user: UserSummary
    to_user: UserSummary

    model_config = ConfigDict(from_attributes=True)


class SentMessage(BaseModel):
    id: int
    to_user: UserSummary
    body: str
    sent_at: datetime
    read_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ReceivedMessage(BaseModel):
    id: int
    from_user: UserSummary
    body: str
    sent_at: datetime
    read_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageReadReceipt(BaseModel):
    id: int
    read_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: MessageRead


class MessageDetailResponse(BaseModel):
    message: MessageDetail


class MessageReadReceiptResponse(BaseModel):
    message: MessageReadReceipt


class SentMessagesResponse(BaseModel):
    messages: list[SentMessage]


class ReceivedMessagesResponse(BaseModel):
    messages: list[ReceivedMessage]
