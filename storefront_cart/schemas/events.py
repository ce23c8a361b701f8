import uuid
from datetime import datetime, timezone
from typing import List, Literal

from pydantic import BaseModel, Field

from .cart import Cart, LineItem, summarize


class CartUpdatedPayload(BaseModel):
    cart_id: str
    items: List[LineItem]
    total_items: int
    total_amount: float


class CartUpdatedEvent(BaseModel):
    """Событие о зафиксированной корзине"""
    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_type: Literal["cart_updated"] = "cart_updated"
    event_timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    producer_service: str = "storefront-cart"
    payload: CartUpdatedPayload

    @classmethod
    def from_cart(cls, cart_id: str, cart: Cart) -> "CartUpdatedEvent":
        summary = summarize(cart)
        return cls(payload=CartUpdatedPayload(
            cart_id=cart_id,
            items=list(cart),
            total_items=summary.total_items,
            total_amount=summary.total_amount
        ))
