from .cart import (
    Cart,
    CartLine,
    CartResponse,
    CartSummary,
    LineItem,
    AddProductRequest,
    UpdateProductAmount,
    deserialize_cart,
    serialize_cart,
    summarize,
)
from .product import Product, StockRecord

__all__ = [
    "Cart",
    "CartLine",
    "CartResponse",
    "CartSummary",
    "LineItem",
    "AddProductRequest",
    "UpdateProductAmount",
    "Product",
    "StockRecord",
    "deserialize_cart",
    "serialize_cart",
    "summarize",
]
