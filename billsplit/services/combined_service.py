import uuid
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.schemas.bill import BillDetail, ParticipantResponse
from billsplit.services.balance_service import accumulate_bill
from billsplit.services.bill_service import get_bills
from billsplit.services.settlement_service import settle_balances
from billsplit.utils.money import balance_status, round_amount


@dataclass
class CombinedBalance:
    participant_key: str
    name: str
    color: str
    balance: Decimal


def identity_key(participant: ParticipantResponse) -> str:
    """
    Key that unifies one person across bills whose participant rows are unrelated.

    Participants created from a saved friend share the friend's id. Otherwise
    the key falls back to lowercase(name) + "-" + color, so two different people
    with the same name (ignoring case) and the same color are merged into one.
    A friend-linked participant never merges with an unlinked namesake.
    """
    if participant.friend_id is not None:
        return f"friend:{participant.friend_id}"
    return f"{participant.name.lower()}-{participant.color}"


def merge_bills(bills: list[BillDetail]) -> dict[str, CombinedBalance]:
    """
    Accumulate several bills into one balance per identity key.

    Each bill's payer is credited with that bill's total against the payer's
    key. Name and color come from the first participant seen for a key, and
    keys iterate in first-encounter order (bill order, then participant order).
    """
    balances: dict = {}
    directory: dict[str, ParticipantResponse] = {}

    for bill in bills:
        for p in bill.participants:
            directory.setdefault(identity_key(p), p)
        accumulate_bill(bill, balances, key_of=identity_key)

    return {
        key: CombinedBalance(
            participant_key=key,
            name=directory[key].name,
            color=directory[key].color,
            balance=amount,
        )
        for key, amount in balances.items()
    }


def build_combined_settlement(bills: list[BillDetail]) -> dict:
    combined = merge_bills(bills)
    transfers = settle_balances({key: c.balance for key, c in combined.items()})

    return {
        "bills": [{"id": b.id, "name": b.name, "total": round_amount(b.total)} for b in bills],
        "combined_total": round_amount(sum((b.total for b in bills), Decimal("0"))),
        "participants": [
            {"id": c.participant_key, "name": c.name, "color": c.color}
            for c in combined.values()
        ],
        "transfers": [
            {
                "from_key": t.from_id,
                "from_name": combined[t.from_id].name,
                "to_key": t.to_id,
                "to_name": combined[t.to_id].name,
                "amount": t.amount,
            }
            for t in transfers
        ],
        "balances": [
            {
                "participant_key": c.participant_key,
                "name": c.name,
                "color": c.color,
                "balance": round_amount(c.balance),
                "status": balance_status(c.balance),
            }
            for c in sorted(combined.values(), key=lambda c: c.name.lower())
        ],
        "all_balanced": not transfers,
    }


async def calculate_combined_settlement(
    db: AsyncSession, bill_ids: list[uuid.UUID], user_id: uuid.UUID
) -> dict | None:
    """
    One settlement across several of the user's bills.
    Raises ValueError for fewer than two distinct bills; returns None if any bill is not found.
    """
    bill_ids = list(dict.fromkeys(bill_ids))
    if len(bill_ids) < 2:
        raise ValueError("Select at least two bills to combine")

    bills = await get_bills(db, bill_ids, user_id)
    if len(bills) != len(bill_ids):
        return None

    return build_combined_settlement([BillDetail.model_validate(b) for b in bills])
