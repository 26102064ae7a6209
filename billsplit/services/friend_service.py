import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.models.friend import Friend


async def list_friends(db: AsyncSession, user_id: uuid.UUID) -> list[Friend]:
    result = await db.execute(
        select(Friend).where(Friend.user_id == user_id).order_by(Friend.name)
    )
    return list(result.scalars().all())


async def add_friend(db: AsyncSession, user_id: uuid.UUID, name: str, color: str) -> Friend:
    friend = Friend(user_id=user_id, name=name.strip(), color=color)
    db.add(friend)
    await db.commit()
    await db.refresh(friend)
    return friend


async def _get_owned_friend(db: AsyncSession, friend_id: uuid.UUID, user_id: uuid.UUID) -> Friend | None:
    result = await db.execute(
        select(Friend).where(Friend.id == friend_id, Friend.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def update_friend(
    db: AsyncSession, friend_id: uuid.UUID, user_id: uuid.UUID, name: str, color: str
) -> Friend | None:
    friend = await _get_owned_friend(db, friend_id, user_id)
    if not friend:
        return None
    friend.name = name.strip()
    friend.color = color
    await db.commit()
    await db.refresh(friend)
    return friend


async def remove_friend(db: AsyncSession, friend_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    """Delete a saved friend. Participants created from it keep their name and color."""
    friend = await _get_owned_friend(db, friend_id, user_id)
    if not friend:
        return False
    await db.delete(friend)
    await db.commit()
    return True
