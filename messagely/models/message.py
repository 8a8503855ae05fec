"""Database model for messages exchanged between users."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from messagely.db.base import Base
from messagely.models.user import User, utcnow


class Message(Base):
    """A message owned by exactly one sender and one recipient."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    from_username: Mapped[str] = mapped_column(String(64), ForeignKey("users.username"), nullable=False, index=True)
    to_username: Mapped[str] = mapped_column(String(64), ForeignKey("users.username"), nullable=False, index=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)  # set once by the recipient

    from_user: Mapped[User] = relationship("User", foreign_keys=[from_username], lazy="raise")
    to_user: Mapped[User] = relationship("User", foreign_keys=[to_username], lazy="raise")
