import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.models.payment import Payment
from billsplit.schemas.bill import BillDetail
from billsplit.services.bill_service import get_bill

logger = logging.getLogger(__name__)


async def get_bill_payments(db: AsyncSession, bill_id: uuid.UUID) -> list[Payment]:
    result = await db.execute(
        select(Payment)
        .where(Payment.bill_id == bill_id)
        .order_by(Payment.created_at)
    )
    return list(result.scalars().all())


def overlay_payments(transfers: list, payments: list) -> list[dict]:
    """
    Left-join freshly computed transfers with stored payment rows on (from, to).

    A stored flag keeps applying to its pair even if the pair's amount has
    changed since it was toggled; the amount shown is always the current one.
    """
    by_pair = {(p.from_participant_id, p.to_participant_id): p for p in payments}
    joined = []
    for t in transfers:
        payment = by_pair.get((t.from_id, t.to_id))
        joined.append({
            "from_id": t.from_id,
            "to_id": t.to_id,
            "amount": t.amount,
            "is_paid": bool(payment and payment.is_paid),
            "paid_at": payment.paid_at if payment and payment.is_paid else None,
        })
    return joined


async def toggle_payment(
    db: AsyncSession,
    bill_id: uuid.UUID,
    user_id: uuid.UUID,
    from_participant_id: uuid.UUID,
    to_participant_id: uuid.UUID,
    is_paid: bool,
) -> Payment | None:
    """
    Mark the transfer from -> to on a bill as paid or unpaid.
    Stores the transfer's current computed amount alongside the flag.
    Returns None if the bill is not found; raises ValueError if no such transfer is currently owed.
    """
    from billsplit.services.settlement_service import calculate_transfers

    bill = await get_bill(db, bill_id, user_id)
    if bill is None:
        return None

    transfers = calculate_transfers(BillDetail.model_validate(bill))
    transfer = next(
        (t for t in transfers if t.from_id == from_participant_id and t.to_id == to_participant_id),
        None,
    )
    if transfer is None:
        raise ValueError("No pending transfer between these participants")

    result = await db.execute(
        select(Payment).where(
            Payment.bill_id == bill_id,
            Payment.from_participant_id == from_participant_id,
            Payment.to_participant_id == to_participant_id,
        )
    )
    payment = result.scalar_one_or_none()
    if payment is None:
        payment = Payment(
            bill_id=bill_id,
            from_participant_id=from_participant_id,
            to_participant_id=to_participant_id,
        )
        db.add(payment)

    payment.amount = transfer.amount
    payment.is_paid = is_paid
    payment.paid_at = datetime.now(timezone.utc) if is_paid else None

    await db.commit()
    await db.refresh(payment)
    logger.info(
        f"Bill {bill_id}: transfer {from_participant_id} -> {to_participant_id} "
        f"({transfer.amount}) marked {'paid' if is_paid else 'unpaid'}"
    )
    return payment
