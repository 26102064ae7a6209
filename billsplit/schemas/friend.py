import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from billsplit.schemas.bill import HEX_COLOR


class FriendCreate(BaseModel):
    name: str = Field(min_length=1)
    color: str = Field(pattern=HEX_COLOR)


class FriendUpdate(FriendCreate):
    pass


class FriendResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: uuid.UUID
    name: str
    color: str
    created_at: datetime
