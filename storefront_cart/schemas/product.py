from pydantic import AliasChoices, BaseModel, Field
from typing import Optional


class Product(BaseModel):
    """Карточка товара из каталога"""
    id: int
    name: str = Field(validation_alias=AliasChoices("name", "title"))
    price: float = Field(ge=0)
    image_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("imageUrl", "image_url", "image"),
        serialization_alias="imageUrl"
    )

    class Config:
        populate_by_name = True
        extra = "ignore"


class StockRecord(BaseModel):
    """Остаток товара на складе (не кешируется)"""
    product_id: int = Field(validation_alias=AliasChoices("id", "productId", "product_id"))
    amount: int = Field(ge=0)

    class Config:
        populate_by_name = True
        extra = "ignore"
