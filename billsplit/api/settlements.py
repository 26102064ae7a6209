import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.core.auth import get_current_user
from billsplit.core.database import get_db
from billsplit.models.user import User
from billsplit.schemas.settlement import (
    SettlementResponse, CombinedSettlementResponse, PaymentToggle, PaymentResponse,
)
from billsplit.services.bill_service import get_bill
from billsplit.services.combined_service import calculate_combined_settlement
from billsplit.services.payment_service import get_bill_payments, toggle_payment
from billsplit.services.settlement_service import calculate_bill_settlement

router = APIRouter(prefix="/api", tags=["settlements"])


@router.get("/bills/{bill_id}/settlement", response_model=SettlementResponse)
async def bill_settlement(
    bill_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await calculate_bill_settlement(db, bill_id, user.id)
    if result is None:
        raise HTTPException(status_code=404, detail="Bill not found")
    return SettlementResponse(**result)


@router.get("/bills/{bill_id}/payments", response_model=list[PaymentResponse])
async def list_payments(
    bill_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await get_bill(db, bill_id, user.id):
        raise HTTPException(status_code=404, detail="Bill not found")
    return await get_bill_payments(db, bill_id)


@router.put("/bills/{bill_id}/payments", response_model=PaymentResponse)
async def set_payment_status(
    bill_id: uuid.UUID,
    body: PaymentToggle,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        payment = await toggle_payment(
            db, bill_id, user.id,
            body.from_participant_id, body.to_participant_id, body.is_paid,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not payment:
        raise HTTPException(status_code=404, detail="Bill not found")
    return payment


@router.get("/combined-settlement", response_model=CombinedSettlementResponse)
async def combined_settlement(
    bills: str = Query(..., description="Comma-separated bill ids"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        bill_ids = [uuid.UUID(b.strip()) for b in bills.split(",") if b.strip()]
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid bill id")
    try:
        result = await calculate_combined_settlement(db, bill_ids, user.id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Bill not found")
    return CombinedSettlementResponse(**result)
