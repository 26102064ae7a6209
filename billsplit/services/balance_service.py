import logging
from collections.abc import Callable, Hashable
from decimal import Decimal

from billsplit.schemas.bill import BillDetail, LineItemResponse, ParticipantResponse
from billsplit.utils.money import to_decimal

logger = logging.getLogger(__name__)


def item_charges(item: LineItemResponse) -> list[tuple]:
    """
    Return (participant_id, amount) pairs an item charges, in claim order.

    Shared items split total_price evenly across the claims marked shared,
    whatever their quantity; an empty pool charges nobody. Individual items
    charge quantity * unit_price per claim with no normalization against the
    item's quantity. Amounts are not rounded.
    """
    if item.is_shared:
        pool = [c for c in item.claims if c.is_shared]
        if not pool:
            return []
        per_person = to_decimal(item.total_price) / len(pool)
        return [(c.participant_id, per_person) for c in pool]

    unit_price = to_decimal(item.unit_price)
    return [(c.participant_id, c.quantity * unit_price) for c in item.claims]


def accumulate_bill(
    bill: BillDetail,
    balances: dict,
    key_of: Callable[[ParticipantResponse], Hashable],
) -> dict:
    """
    Add one bill's charges and payer credit into balances, keyed by key_of(participant).

    Keys are inserted in participant order the first time they are seen, so the
    resulting dict iterates in encounter order. Claims for participants not in
    the bill and a payer that is not a participant are ignored.
    """
    participants = {p.id: p for p in bill.participants}
    for p in bill.participants:
        balances.setdefault(key_of(p), Decimal("0"))

    for item in bill.items:
        for participant_id, amount in item_charges(item):
            participant = participants.get(participant_id)
            if participant is None:
                logger.warning(f"Bill {bill.id}: ignoring claim on item {item.id} for unknown participant {participant_id}")
                continue
            balances[key_of(participant)] += amount

    if bill.payer_id is not None:
        payer = participants.get(bill.payer_id)
        if payer is None:
            logger.warning(f"Bill {bill.id}: payer {bill.payer_id} is not a participant, total not credited")
        else:
            balances[key_of(payer)] -= to_decimal(bill.total)

    return balances


def calculate_balances(bill: BillDetail) -> dict:
    """
    Net balance per participant id for a single bill.
    Positive = owes money into the pot, negative = is owed.
    The payer is credited with the bill's declared total, not the sum of its items.
    """
    return accumulate_bill(bill, {}, key_of=lambda p: p.id)
