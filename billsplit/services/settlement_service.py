import uuid
from collections.abc import Hashable
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.schemas.bill import BillDetail
from billsplit.services.balance_service import calculate_balances
from billsplit.services.bill_service import get_bill
from billsplit.services.payment_service import get_bill_payments, overlay_payments
from billsplit.utils.money import TOLERANCE, balance_status, round_amount


@dataclass(frozen=True)
class Transfer:
    from_id: Hashable
    to_id: Hashable
    amount: Decimal


@dataclass
class _Creditor:
    key: Hashable
    remaining: Decimal


def settle_balances(balances: dict) -> list[Transfer]:
    """
    Greedy debtor/creditor sweep over a balance map.

    Debtors (balance > 0.01) are taken in the map's iteration order; each one
    pays creditors (balance < -0.01) in their iteration order, as much as both
    sides still have, until its remaining debt is within 0.01. Emitted amounts
    are rounded to cents but the running totals are decremented by the exact
    amount, so rounding never compounds across transfers.

    This is not a minimum-transfer-count solver: no sorting by size, no subset
    matching. The order is kept stable because paid flags are keyed by the
    resulting (from, to) pairs. If the map does not net to zero the leftover
    debt or credit is simply left unmatched.
    """
    debtors = [(key, amount) for key, amount in balances.items() if amount > TOLERANCE]
    creditors = [_Creditor(key, -amount) for key, amount in balances.items() if amount < -TOLERANCE]

    transfers = []
    for debtor_key, remaining_debt in debtors:
        for creditor in creditors:
            if remaining_debt > TOLERANCE and creditor.remaining > TOLERANCE:
                amount = min(remaining_debt, creditor.remaining)
                transfers.append(Transfer(debtor_key, creditor.key, round_amount(amount)))
                remaining_debt -= amount
                creditor.remaining -= amount
            if remaining_debt <= TOLERANCE:
                break

    return transfers


def calculate_transfers(bill: BillDetail) -> list[Transfer]:
    """Fresh settlement for one bill snapshot."""
    return settle_balances(calculate_balances(bill))


def all_items_claimed(bill: BillDetail) -> bool:
    """Every shared item has a pool member; every individual item is claimed to its quantity."""
    for item in bill.items:
        if item.is_shared:
            if not any(c.is_shared for c in item.claims):
                return False
        elif sum(c.quantity for c in item.claims) < item.quantity:
            return False
    return True


def build_settlement(bill: BillDetail, payments: list) -> dict:
    balances = calculate_balances(bill)
    transfers = overlay_payments(settle_balances(balances), payments)
    participants = {p.id: p for p in bill.participants}
    claimed = all_items_claimed(bill)

    return {
        "bill_id": bill.id,
        "bill_name": bill.name,
        "total": round_amount(bill.total),
        "payer_id": bill.payer_id,
        "transfers": [
            {
                "from_id": t["from_id"],
                "from_name": participants[t["from_id"]].name,
                "to_id": t["to_id"],
                "to_name": participants[t["to_id"]].name,
                "amount": t["amount"],
                "is_paid": t["is_paid"],
                "paid_at": t["paid_at"],
            }
            for t in transfers
        ],
        "balances": [
            {
                "participant_id": p.id,
                "name": p.name,
                "color": p.color,
                "balance": round_amount(balances[p.id]),
                "status": balance_status(balances[p.id]),
            }
            for p in bill.participants
        ],
        "all_balanced": not transfers,
        "all_items_claimed": claimed,
        "can_calculate": bill.payer_id is not None and bool(bill.items) and claimed,
    }


async def calculate_bill_settlement(
    db: AsyncSession, bill_id: uuid.UUID, user_id: uuid.UUID
) -> dict | None:
    """
    Recompute a bill's transfers and join them with its stored paid flags.
    Returns None if the bill does not exist or belongs to someone else.
    """
    bill = await get_bill(db, bill_id, user_id)
    if bill is None:
        return None
    snapshot = BillDetail.model_validate(bill)
    payments = await get_bill_payments(db, bill_id)
    return build_settlement(snapshot, payments)
