"""Message ledger: create, fetch and mark-read with sender/recipient checks."""
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from messagely.core.exceptions import Forbidden, MessageAlreadyRead, NotFound
from messagely.models.message import Message
from messagely.models.user import utcnow
from messagely.schemas.message import MessageCreate
from messagely.services.users import get_user_by_username

logger = logging.getLogger(__name__)


async def create_message(session: AsyncSession, from_username: str, data: MessageCreate) -> Message:
    recipient = await get_user_by_username(session, data.to_username)
    if not recipient:
        raise NotFound(f"User '{data.to_username}' not found")

    message = Message(
        from_username=from_username,
        to_username=recipient.username,
        body=data.body,
        sent_at=utcnow(),
        read_at=None,
    )
    session.add(message)
    await session.flush()
    await session.refresh(message)
    return message


async def get_message(session: AsyncSession, message_id: int, caller: str) -> Message:
    """Fetch a message with both ends loaded. Only its sender or recipient may see it."""

    result = await session.execute(
        select(Message)
        .options(joinedload(Message.from_user), joinedload(Message.to_user))
        .where(Message.id == message_id)
    )
    message = result.scalar_one_or_none()
    if not message:
        raise NotFound(f"Message {message_id} not found")
    if caller not in (message.from_username, message.to_username):
        logger.warning("User %s denied access to message %s", caller, message_id)
        raise Forbidden("Only the sender or recipient may view this message")
    return message


async def mark_read(session: AsyncSession, message_id: int, caller: str) -> Message:
    """Stamp read_at once. Only the recipient may do this."""

    message = await session.get(Message, message_id)
    if not message:
        raise NotFound(f"Message {message_id} not found")
    if caller != message.to_username:
        logger.warning("User %s denied marking message %s as read", caller, message_id)
        raise Forbidden("Only the recipient may mark this message as read")
    if message.read_at is not None:
        raise MessageAlreadyRead()

    result = await session.execute(
        update(Message)
        .where(Message.id == message_id, Message.read_at.is_(None))
        .values(read_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        # Lost a race with another mark-read of the same message.
        raise MessageAlreadyRead()
    await session.refresh(message)
    return message
