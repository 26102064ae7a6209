import logging
import uuid
from decimal import Decimal

from sqlalchemy import select, delete, update, or_
from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.models.bill import Bill, Participant, LineItem, Claim
from billsplit.models.friend import Friend
from billsplit.models.payment import Payment

logger = logging.getLogger(__name__)

PARTICIPANT_COLORS = [
    "#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6",
    "#ec4899", "#14b8a6", "#f97316", "#06b6d4", "#84cc16",
]


async def create_bill(db: AsyncSession, user_id: uuid.UUID, name: str, total: Decimal) -> Bill:
    bill = Bill(user_id=user_id, name=name, total=total, payer_id=None)
    db.add(bill)
    await db.commit()
    await db.refresh(bill)
    logger.info(f"User {user_id} created bill {bill.id}")
    return bill


async def list_user_bills(db: AsyncSession, user_id: uuid.UUID):
    result = await db.execute(
        select(Bill.id, Bill.name, Bill.date, Bill.total)
        .where(Bill.user_id == user_id)
        .order_by(Bill.date.desc())
    )
    return result.all()


async def get_bill(db: AsyncSession, bill_id: uuid.UUID, user_id: uuid.UUID) -> Bill | None:
    """Bill with participants, items and claims loaded, or None if missing or not owned by user_id."""
    result = await db.execute(
        select(Bill)
        .where(Bill.id == bill_id, Bill.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_bills(db: AsyncSession, bill_ids: list[uuid.UUID], user_id: uuid.UUID) -> list[Bill]:
    """Owned bills among bill_ids, in the order requested. Unknown ids are skipped."""
    result = await db.execute(
        select(Bill)
        .where(Bill.id.in_(bill_ids), Bill.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    found = {b.id: b for b in result.scalars().all()}
    return [found[bid] for bid in bill_ids if bid in found]


async def update_bill(
    db: AsyncSession, bill_id: uuid.UUID, user_id: uuid.UUID, changes: dict
) -> Bill | None:
    """
    Apply a partial update. Only keys present in changes are touched, so
    {"payer_id": None} clears the payer while an absent key leaves it alone.
    """
    bill = await get_bill(db, bill_id, user_id)
    if not bill:
        return None

    for field in ("name", "total"):
        if field in changes and changes[field] is None:
            raise ValueError(f"Bill {field} cannot be null")

    if changes.get("payer_id") is not None:
        if changes["payer_id"] not in {p.id for p in bill.participants}:
            raise ValueError("Payer must be a participant of this bill")

    for field in ("name", "payer_id", "total"):
        if field in changes:
            setattr(bill, field, changes[field])

    await db.commit()
    await db.refresh(bill)
    return bill


async def add_participant(
    db: AsyncSession,
    bill_id: uuid.UUID,
    user_id: uuid.UUID,
    name: str | None = None,
    color: str | None = None,
    friend_id: uuid.UUID | None = None,
) -> Participant | None:
    """
    Add a participant, optionally from a saved friend (whose name and color
    fill in whatever was not given). Without a color the next palette color is used.
    """
    bill = await get_bill(db, bill_id, user_id)
    if not bill:
        return None

    name = name.strip() if name else name

    if friend_id is not None:
        result = await db.execute(
            select(Friend).where(Friend.id == friend_id, Friend.user_id == user_id)
        )
        friend = result.scalar_one_or_none()
        if not friend:
            raise ValueError("Friend not found")
        name = name or friend.name
        color = color or friend.color

    if not name:
        raise ValueError("Participant name is required")
    if not color:
        color = PARTICIPANT_COLORS[len(bill.participants) % len(PARTICIPANT_COLORS)]

    participant = Participant(bill_id=bill.id, name=name, color=color, friend_id=friend_id)
    db.add(participant)
    await db.commit()
    await db.refresh(participant)
    logger.info(f"Bill {bill_id}: added participant {participant.id}")
    return participant


async def remove_participant(db: AsyncSession, participant_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    result = await db.execute(
        select(Participant)
        .join(Bill, Bill.id == Participant.bill_id)
        .where(Participant.id == participant_id, Bill.user_id == user_id)
    )
    participant = result.scalar_one_or_none()
    if not participant:
        return False

    # Clear dependents explicitly so the delete does not rely on database-side cascades.
    await db.execute(delete(Claim).where(Claim.participant_id == participant_id))
    await db.execute(
        delete(Payment).where(
            or_(
                Payment.from_participant_id == participant_id,
                Payment.to_participant_id == participant_id,
            )
        )
    )
    await db.execute(
        update(Bill)
        .where(Bill.id == participant.bill_id, Bill.payer_id == participant_id)
        .values(payer_id=None)
    )
    await db.execute(delete(Participant).where(Participant.id == participant_id))
    await db.commit()
    logger.info(f"Bill {participant.bill_id}: removed participant {participant_id}")
    return True


async def add_line_item(
    db: AsyncSession,
    bill_id: uuid.UUID,
    user_id: uuid.UUID,
    description: str,
    quantity: int,
    unit_price: Decimal,
    is_shared: bool,
) -> LineItem | None:
    bill = await get_bill(db, bill_id, user_id)
    if not bill:
        return None

    item = LineItem(
        bill_id=bill.id,
        description=description,
        quantity=quantity,
        unit_price=unit_price,
        total_price=quantity * unit_price,
        is_shared=is_shared,
    )
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item


async def _get_owned_item(db: AsyncSession, item_id: uuid.UUID, user_id: uuid.UUID) -> LineItem | None:
    result = await db.execute(
        select(LineItem)
        .join(Bill, Bill.id == LineItem.bill_id)
        .where(LineItem.id == item_id, Bill.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def update_line_item_shared(
    db: AsyncSession, item_id: uuid.UUID, user_id: uuid.UUID, is_shared: bool
) -> bool:
    item = await _get_owned_item(db, item_id, user_id)
    if not item:
        return False
    item.is_shared = is_shared
    await db.commit()
    return True


async def update_claim(
    db: AsyncSession,
    item_id: uuid.UUID,
    participant_id: uuid.UUID,
    user_id: uuid.UUID,
    quantity: int,
    is_shared: bool,
) -> Claim | None:
    """
    Create or replace the claim of one participant on one item.
    On an individual item the claimed quantities may not add up to more than the item's quantity.
    """
    item = await _get_owned_item(db, item_id, user_id)
    if not item:
        return None

    result = await db.execute(
        select(Participant.id).where(
            Participant.id == participant_id, Participant.bill_id == item.bill_id
        )
    )
    if result.scalar_one_or_none() is None:
        raise ValueError("Participant does not belong to this bill")

    existing = next((c for c in item.claims if c.participant_id == participant_id), None)

    if not item.is_shared:
        claimed_by_others = sum(
            c.quantity for c in item.claims if c.participant_id != participant_id
        )
        if claimed_by_others + quantity > item.quantity:
            available = item.quantity - claimed_by_others
            raise ValueError(f"Only {available} of {item.quantity} units are still available")

    if existing:
        existing.quantity = quantity
        existing.is_shared = is_shared
        claim = existing
    else:
        claim = Claim(
            line_item_id=item.id,
            participant_id=participant_id,
            quantity=quantity,
            is_shared=is_shared,
        )
        db.add(claim)

    await db.commit()
    await db.refresh(claim)
    return claim


async def remove_claim(
    db: AsyncSession, item_id: uuid.UUID, participant_id: uuid.UUID, user_id: uuid.UUID
) -> bool:
    item = await _get_owned_item(db, item_id, user_id)
    if not item:
        return False
    await db.execute(
        delete(Claim).where(
            Claim.line_item_id == item_id,
            Claim.participant_id == participant_id,
        )
    )
    await db.commit()
    return True
