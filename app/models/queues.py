from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class OrderMessage(BaseModel):
    order_id: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class InventoryUpdateMessage(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity_change: int
    reason: Optional[str] = None


class QueuedMessage(BaseModel):
    id: str
    content: str
    inserted_on: Optional[datetime] = None
    expires_on: Optional[datetime] = None

    @staticmethod
    def from_queue_message(message: Any) -> "QueuedMessage":
        return QueuedMessage(
            id=str(message.id),
            content=str(message.content or ""),
            inserted_on=getattr(message, "inserted_on", None),
            expires_on=getattr(message, "expires_on", None),
        )


class EnqueueResponse(BaseModel):
    queue_name: str
    message_id: str


class PendingMessagesResponse(BaseModel):
    queue_name: str
    count: int
    messages: list[QueuedMessage]
