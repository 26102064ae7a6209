import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.core.auth import get_current_user
from billsplit.core.database import get_db
from billsplit.models.user import User
from billsplit.schemas.friend import FriendCreate, FriendUpdate, FriendResponse
from billsplit.services.friend_service import list_friends, add_friend, update_friend, remove_friend

router = APIRouter(prefix="/api/friends", tags=["friends"])


@router.get("", response_model=list[FriendResponse])
async def get_friends(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_friends(db, user.id)


@router.post("", response_model=FriendResponse, status_code=201)
async def create_friend(
    body: FriendCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await add_friend(db, user.id, body.name, body.color)


@router.patch("/{friend_id}", response_model=FriendResponse)
async def edit_friend(
    friend_id: uuid.UUID,
    body: FriendUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    friend = await update_friend(db, friend_id, user.id, body.name, body.color)
    if not friend:
        raise HTTPException(status_code=404, detail="Friend not found")
    return friend


@router.delete("/{friend_id}", status_code=204)
async def delete_friend(
    friend_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await remove_friend(db, friend_id, user.id):
        raise HTTPException(status_code=404, detail="Friend not found")
