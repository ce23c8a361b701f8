from sqlalchemy import Column, String, Text, DateTime, func
from ..database import Base


class StorageSlot(Base):
    __tablename__ = "storage_slots"

    key = Column(String, primary_key=True, index=True)  # например "@RocketShoes:cart"
    value = Column(Text, nullable=False)  # сериализованная корзина (JSON)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
