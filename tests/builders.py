"""Small constructors for bill snapshots used across the service tests."""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from billsplit.schemas.bill import BillDetail, ClaimResponse, LineItemResponse, ParticipantResponse


def person(name: str, color: str = "#3b82f6", friend_id: uuid.UUID | None = None) -> ParticipantResponse:
    return ParticipantResponse(id=uuid.uuid4(), name=name, color=color, friend_id=friend_id)


def claim(participant: ParticipantResponse, quantity: int = 1, shared: bool = False) -> ClaimResponse:
    return ClaimResponse(participant_id=participant.id, quantity=quantity, is_shared=shared)


def item(quantity: int, unit_price: str, claims: list, shared: bool = False, description: str = "item") -> LineItemResponse:
    price = Decimal(unit_price)
    return LineItemResponse(
        id=uuid.uuid4(),
        description=description,
        quantity=quantity,
        unit_price=price,
        total_price=quantity * price,
        is_shared=shared,
        claims=claims,
    )


def bill(participants: list, items: list, payer: ParticipantResponse | None = None,
         total: str = "0", name: str = "Dinner") -> BillDetail:
    return BillDetail(
        id=uuid.uuid4(),
        name=name,
        date=datetime(2026, 10, 1, tzinfo=timezone.utc),
        payer_id=payer.id if payer else None,
        total=Decimal(total),
        participants=participants,
        items=items,
    )
