"""User service functions: registration, authentication and the user directory."""
from __future__ import annotations

import asyncio
import enum
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from messagely.core.exceptions import DuplicateUsername, NotFound
from messagely.core.security import PasswordHasher
from messagely.models.message import Message
from messagely.models.user import User, utcnow
from messagely.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)


class AuthResult(enum.Enum):
    """Outcome of a credential check. Only AUTHENTICATED is truthy."""

    AUTHENTICATED = "authenticated"
    INVALID_CREDENTIALS = "invalid_credentials"
    STORE_UNAVAILABLE = "store_unavailable"

    def __bool__(self) -> bool:
        return self is AuthResult.AUTHENTICATED


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, username: str) -> User:
    user = await get_user_by_username(session, username)
    if not user:
        raise NotFound(f"User '{username}' not found")
    return user


async def register_user(session: AsyncSession, data: RegisterRequest, hasher: PasswordHasher) -> User:
    """Insert a new user and stamp an initial login.

    The username uniqueness constraint is left to the store, so the loser of
    two concurrent registrations gets DuplicateUsername instead of an
    overwrite.
    """
    user = User(
        username=data.username,
        password=await asyncio.to_thread(hasher.hash, data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        phone=data.phone,
        join_at=utcnow(),
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        logger.info("Registration rejected, username %s already exists", data.username)
        raise DuplicateUsername() from exc

    await update_login_timestamp(session, user.username)
    await session.refresh(user)
    logger.info("Registered user %s", user.username)
    return user


async def authenticate(
    session: AsyncSession, username: str, password: str, hasher: PasswordHasher
) -> AuthResult:
    try:
        result = await session.execute(select(User.password).where(User.username == username))
        hashed = result.scalar_one_or_none()
        if hashed is None:
            # Spend the same hashing time as a real check.
            await asyncio.to_thread(hasher.dummy_verify)
            logger.info("Failed login for %s", username)
            return AuthResult.INVALID_CREDENTIALS
        try:
            matches = await asyncio.to_thread(hasher.verify, password, hashed)
        except ValueError:
            logger.warning("Stored password hash for %s is unreadable", username)
            matches = False
        if not matches:
            logger.info("Failed login for %s", username)
            return AuthResult.INVALID_CREDENTIALS
        await update_login_timestamp(session, username)
    except SQLAlchemyError:
        logger.exception("Store error while authenticating %s", username)
        return AuthResult.STORE_UNAVAILABLE
    return AuthResult.AUTHENTICATED


async def update_login_timestamp(session: AsyncSession, username: str) -> bool:
    result = await session.execute(
        update(User)
        .where(User.username == username)
        .values(last_login_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def list_users(session: AsyncSession) -> list[User]:
    result = await session.execute(select(User).order_by(User.last_name, User.first_name))
    return list(result.scalars().all())


async def messages_from(session: AsyncSession, username: str) -> list[Message]:
    """Messages sent by a user, each with its recipient loaded."""

    await get_user(session, username)
    result = await session.execute(
        select(Message)
        .options(joinedload(Message.to_user))
        .where(Message.from_username == username)
        .order_by(Message.sent_at, Message.id)
    )
    return list(result.scalars().all())


async def messages_to(session: AsyncSession, username: str) -> list[Message]:
    """Messages received by a user, each with its sender loaded."""

    await get_user(session, username)
    result = await session.execute(
        select(Message)
        .options(joinedload(Message.from_user))
        .where(Message.to_username == username)
        .order_by(Message.sent_at, Message.id)
    )
    return list(result.scalars().all())
