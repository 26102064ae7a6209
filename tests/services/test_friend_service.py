import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
import pytest

from billsplit.models.friend import Friend
from billsplit.services.friend_service import add_friend, update_friend, remove_friend

USER_ID = uuid.uuid4()


def make_db():
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.mark.asyncio
async def test_add_friend_strips_name():
    db = make_db()
    friend = await add_friend(db, USER_ID, "  Ana García ", "#3b82f6")

    assert isinstance(friend, Friend)
    assert friend.name == "Ana García"
    assert friend.user_id == USER_ID
    db.add.assert_called_once_with(friend)
    db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_friend():
    db = make_db()
    stored = SimpleNamespace(id=uuid.uuid4(), name="Ana", color="#3b82f6")
    with patch("billsplit.services.friend_service._get_owned_friend", return_value=stored):
        friend = await update_friend(db, stored.id, USER_ID, "Anita", "#ec4899")
    assert friend.name == "Anita"
    assert friend.color == "#ec4899"


@pytest.mark.asyncio
async def test_update_unknown_friend():
    db = make_db()
    with patch("billsplit.services.friend_service._get_owned_friend", return_value=None):
        assert await update_friend(db, uuid.uuid4(), USER_ID, "Ana", "#3b82f6") is None
    db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_remove_friend():
    db = make_db()
    stored = SimpleNamespace(id=uuid.uuid4())
    with patch("billsplit.services.friend_service._get_owned_friend", return_value=stored):
        assert await remove_friend(db, stored.id, USER_ID) is True
    db.delete.assert_awaited_once_with(stored)


@pytest.mark.asyncio
async def test_remove_unknown_friend():
    db = make_db()
    with patch("billsplit.services.friend_service._get_owned_friend", return_value=None):
        assert await remove_friend(db, uuid.uuid4(), USER_ID) is False
    db.delete.assert_not_awaited()
