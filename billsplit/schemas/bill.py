import uuid
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class BillCreate(BaseModel):
    name: str = Field(min_length=1)
    total: Decimal = Field(ge=0)


class BillUpdate(BaseModel):
    """Partial update. name and total may be omitted but not null; a null payer_id clears the payer."""
    name: str | None = Field(default=None, min_length=1)
    payer_id: uuid.UUID | None = None
    total: Decimal | None = Field(default=None, ge=0)

    @field_validator("name", "total")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ParticipantCreate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    color: str | None = Field(default=None, pattern=HEX_COLOR)
    friend_id: uuid.UUID | None = None


class LineItemCreate(BaseModel):
    description: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0)
    is_shared: bool = False


class LineItemSharedUpdate(BaseModel):
    is_shared: bool


class ClaimUpdate(BaseModel):
    quantity: int = Field(ge=0)
    is_shared: bool


class CreatedResponse(BaseModel):
    id: uuid.UUID


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    name: str
    color: str
    friend_id: uuid.UUID | None = None


class ClaimResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    participant_id: uuid.UUID
    quantity: int
    is_shared: bool


class LineItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    description: str = ""
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    is_shared: bool
    claims: list[ClaimResponse] = []


class BillDetail(BaseModel):
    """Fully materialized bill: the snapshot every settlement is computed from."""
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    name: str
    date: datetime
    payer_id: uuid.UUID | None = None
    total: Decimal
    participants: list[ParticipantResponse] = []
    items: list[LineItemResponse] = []


class BillSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    name: str
    date: datetime
    total: Decimal
