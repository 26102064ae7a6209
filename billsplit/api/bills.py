import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.core.auth import get_current_user
from billsplit.core.database import get_db
from billsplit.models.user import User
from billsplit.schemas.bill import (
    BillCreate, BillUpdate, BillDetail, BillSummary, CreatedResponse,
    ParticipantCreate, LineItemCreate, LineItemSharedUpdate, ClaimUpdate,
)
from billsplit.services.bill_service import (
    create_bill, list_user_bills, get_bill, update_bill,
    add_participant, remove_participant,
    add_line_item, update_line_item_shared,
    update_claim, remove_claim,
)

router = APIRouter(prefix="/api", tags=["bills"])


@router.post("/bills", response_model=CreatedResponse)
async def create(
    body: BillCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    bill = await create_bill(db, user.id, body.name, body.total)
    return {"id": bill.id}


@router.get("/my-bills", response_model=list[BillSummary])
async def my_bills(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_user_bills(db, user.id)


@router.get("/bills/{bill_id}", response_model=BillDetail)
async def get(
    bill_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    bill = await get_bill(db, bill_id, user.id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return bill


@router.patch("/bills/{bill_id}")
async def update(
    bill_id: uuid.UUID,
    body: BillUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        bill = await update_bill(db, bill_id, user.id, body.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return {"success": True}


@router.post("/bills/{bill_id}/participants", response_model=CreatedResponse)
async def create_participant(
    bill_id: uuid.UUID,
    body: ParticipantCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        participant = await add_participant(
            db, bill_id, user.id, body.name, body.color, body.friend_id
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not participant:
        raise HTTPException(status_code=404, detail="Bill not found")
    return {"id": participant.id}


@router.delete("/participants/{participant_id}")
async def delete_participant(
    participant_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await remove_participant(db, participant_id, user.id):
        raise HTTPException(status_code=404, detail="Participant not found")
    return {"success": True}


@router.post("/bills/{bill_id}/items", response_model=CreatedResponse)
async def create_item(
    bill_id: uuid.UUID,
    body: LineItemCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    item = await add_line_item(
        db, bill_id, user.id,
        body.description, body.quantity, body.unit_price, body.is_shared,
    )
    if not item:
        raise HTTPException(status_code=404, detail="Bill not found")
    return {"id": item.id}


@router.patch("/items/{item_id}/shared")
async def set_item_shared(
    item_id: uuid.UUID,
    body: LineItemSharedUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await update_line_item_shared(db, item_id, user.id, body.is_shared):
        raise HTTPException(status_code=404, detail="Item not found")
    return {"success": True}


@router.put("/items/{item_id}/claims/{participant_id}")
async def put_claim(
    item_id: uuid.UUID,
    participant_id: uuid.UUID,
    body: ClaimUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        claim = await update_claim(db, item_id, participant_id, user.id, body.quantity, body.is_shared)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not claim:
        raise HTTPException(status_code=404, detail="Item not found")
    return {"success": True}


@router.delete("/items/{item_id}/claims/{participant_id}")
async def delete_claim(
    item_id: uuid.UUID,
    participant_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await remove_claim(db, item_id, participant_id, user.id):
        raise HTTPException(status_code=404, detail="Item not found")
    return {"success": True}
