from pydantic import BaseModel, Field, TypeAdapter
from typing import Iterable, List, Optional, Tuple


class LineItem(BaseModel):
    id: int
    name: str
    price: float
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    amount: int = Field(ge=1)

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def subtotal(self) -> float:
        return round(self.price * self.amount, 2)


class AddProductRequest(BaseModel):
    product_id: int


class UpdateProductAmount(BaseModel):
    amount: int


class CartLine(BaseModel):
    id: int
    name: str
    price: float
    image_url: Optional[str] = None
    amount: int
    subtotal: float


class CartSummary(BaseModel):
    total_items: int
    distinct_items: int
    total_amount: float
    items: List[CartLine]


class CartResponse(BaseModel):
    status: str
    items: List[LineItem]


Cart = Tuple[LineItem, ...]

_cart_adapter = TypeAdapter(List[LineItem])


def serialize_cart(items: Iterable[LineItem]) -> str:
    """Сериализует корзину в JSON-список позиций (порядок сохраняется)"""
    return _cart_adapter.dump_json(list(items), by_alias=True).decode("utf-8")


def deserialize_cart(raw: str) -> Cart:
    """Восстанавливает корзину из JSON; дубликаты товаров считаются повреждением"""
    items = _cart_adapter.validate_json(raw)

    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate product {item.id} in stored cart")
        seen.add(item.id)

    return tuple(items)


def summarize(items: Iterable[LineItem]) -> CartSummary:
    """Считает итоги корзины (не сохраняются)"""
    lines = [
        CartLine(
            id=item.id,
            name=item.name,
            price=item.price,
            image_url=item.image_url,
            amount=item.amount,
            subtotal=item.subtotal
        )
        for item in items
    ]
    return CartSummary(
        total_items=sum(line.amount for line in lines),
        distinct_items=len(lines),
        total_amount=round(sum(line.subtotal for line in lines), 2),
        items=lines
    )
