"""Pydantic schemas for the user directory."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    username: str
    first_name: str
    last_name: str
    phone: str

    model_config = ConfigDict(from_attributes=True)


class UserDetail(UserSummary):
    join_at: datetime
    last_login_at: datetime | None = None


class UserListResponse(BaseModel):
    users: list[UserSummary]


class UserDetailResponse(BaseModel):
    user: UserDetail
