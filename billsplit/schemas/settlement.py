import uuid
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict


class TransferEntry(BaseModel):
    from_id: uuid.UUID
    from_name: str
    to_id: uuid.UUID
    to_name: str
    amount: Decimal
    is_paid: bool = False
    paid_at: datetime | None = None


class ParticipantBalance(BaseModel):
    participant_id: uuid.UUID
    name: str
    color: str
    balance: Decimal
    status: str


class SettlementResponse(BaseModel):
    bill_id: uuid.UUID
    bill_name: str
    total: Decimal
    payer_id: uuid.UUID | None
    transfers: list[TransferEntry]
    balances: list[ParticipantBalance]
    all_balanced: bool
    all_items_claimed: bool
    can_calculate: bool


class PaymentToggle(BaseModel):
    from_participant_id: uuid.UUID
    to_participant_id: uuid.UUID
    is_paid: bool


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    bill_id: uuid.UUID
    from_participant_id: uuid.UUID
    to_participant_id: uuid.UUID
    amount: Decimal
    is_paid: bool
    paid_at: datetime | None = None


class CombinedParticipant(BaseModel):
    id: str
    name: str
    color: str


class CombinedTransfer(BaseModel):
    from_key: str
    from_name: str
    to_key: str
    to_name: str
    amount: Decimal


class CombinedBalanceEntry(BaseModel):
    participant_key: str
    name: str
    color: str
    balance: Decimal
    status: str


class IncludedBill(BaseModel):
    id: uuid.UUID
    name: str
    total: Decimal


class CombinedSettlementResponse(BaseModel):
    bills: list[IncludedBill]
    combined_total: Decimal
    participants: list[CombinedParticipant]
    transfers: list[CombinedTransfer]
    balances: list[CombinedBalanceEntry]
    all_balanced: bool
