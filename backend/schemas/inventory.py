from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel


InventoryTransactionType = Literal["RECEIPT", "SALE", "ADJUSTMENT", "TRANSFER"]


class InventoryTransactionOut(BaseModel):
    id: int
    product_id: int
    organization_id: int
    quantity_delta: int
    occurred_at: datetime
    type: InventoryTransactionType
    notes: Optional[str] = None
    created_by_user_id: Optional[UUID] = None

    class Config:
        from_attributes = True
