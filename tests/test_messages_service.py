"""Tests for the message ledger's ownership rules."""
from __future__ import annotations

import pytest

from conftest import registration
from messagely.core.exceptions import Forbidden, MessageAlreadyRead, NotFound
from messagely.schemas.message import MessageCreate
from messagely.services import messages as message_service
from messagely.services import users as user_service


@pytest.fixture
async def people(session, hasher):
    for username in ("alice", "bob", "carol"):
        await user_service.register_user(session, registration(username), hasher)
    await session.commit()


@pytest.fixture
async def message(session, people):
    message = await message_service.create_message(session, "alice", MessageCreate(to_username="bob", body="hi"))
    await session.commit()
    return message


@pytest.mark.asyncio
async def test_create_binds_sender_and_leaves_unread(message) -> None:
    assert message.id is not None
    assert message.from_username == "alice"
    assert message.to_username == "bob"
    assert message.body == "hi"
    assert message.sent_at is not None
    assert message.read_at is None


@pytest.mark.asyncio
async def test_create_to_unknown_recipient(session, people) -> None:
    with pytest.raises(NotFound):
        await message_service.create_message(session, "alice", MessageCreate(to_username="ghost", body="hello?"))


@pytest.mark.asyncio
async def test_get_for_sender_and_recipient(session, message) -> None:
    for caller in ("alice", "bob"):
        fetched = await message_service.get_message(session, message.id, caller)
        assert fetched.from_user.username == "alice"
        assert fetched.to_user.username == "bob"


@pytest.mark.asyncio
async def test_get_for_third_party_is_forbidden(session, message) -> None:
    with pytest.raises(Forbidden):
        await message_service.get_message(session, message.id, "carol")


@pytest.mark.asyncio
async def test_get_unknown_id(session, people) -> None:
    with pytest.raises(NotFound):
        await message_service.get_message(session, 9999, "alice")


@pytest.mark.asyncio
async def test_recipient_marks_read_once(session, message) -> None:
    read = await message_service.mark_read(session, message.id, "bob")
    await session.commit()

    assert read.read_at is not None
    assert read.read_at >= read.sent_at

    with pytest.raises(MessageAlreadyRead):
        await message_service.mark_read(session, message.id, "bob")
    again = await message_service.get_message(session, message.id, "bob")
    assert again.read_at == read.read_at


@pytest.mark.asyncio
async def test_only_recipient_may_mark_read(session, message) -> None:
    for caller in ("alice", "carol"):
        with pytest.raises(Forbidden):
            await message_service.mark_read(session, message.id, caller)

    fetched = await message_service.get_message(session, message.id, "alice")
    assert fetched.read_at is None


@pytest.mark.asyncio
async def test_mark_read_unknown_id(session, people) -> None:
    with pytest.raises(NotFound):
        await message_service.mark_read(session, 9999, "bob")


@pytest.mark.asyncio
async def test_read_state_is_shared_between_views(session, message) -> None:
    await message_service.mark_read(session, message.id, "bob")
    await session.commit()

    sent = await user_service.messages_from(session, "alice")
    received = await user_service.messages_to(session, "bob")

    assert sent[0].read_at is not None
    assert sent[0].read_at == received[0].read_at
