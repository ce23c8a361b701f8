"""Адаптеры хранилища: один слот ключ-значение на корзину."""
import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import StorageError
from ..models.storage_slot import StorageSlot
from ..schemas.cart import Cart, deserialize_cart, serialize_cart

logger = logging.getLogger(__name__)


class SlotStorage:
    """Базовый интерфейс хранилища слотов"""

    def read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class InMemorySlotStorage(SlotStorage):
    """Хранилище в памяти процесса (тесты, временные сессии)"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def write(self, key: str, value: str) -> None:
        self.slots[key] = value

    def delete(self, key: str) -> None:
        self.slots.pop(key, None)


class SqlSlotStorage(SlotStorage):
    """Хранилище слотов в таблице storage_slots"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            slot = db.query(StorageSlot).filter(StorageSlot.key == key).first()
            return slot.value if slot else None
        except SQLAlchemyError as e:
            logger.error(f"Error reading slot {key}: {e}")
            raise StorageError(f"Error reading slot {key}: {e}") from e
        finally:
            db.close()

    def write(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            slot = db.query(StorageSlot).filter(StorageSlot.key == key).first()
            if slot:
                slot.value = value
            else:
                db.add(StorageSlot(key=key, value=value))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error writing slot {key}: {e}")
            raise StorageError(f"Error writing slot {key}: {e}") from e
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self.session_factory()
        try:
            db.query(StorageSlot).filter(StorageSlot.key == key).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting slot {key}: {e}")
            raise StorageError(f"Error deleting slot {key}: {e}") from e
        finally:
            db.close()


def load_cart(storage: SlotStorage, key: str) -> Cart:
    """Читает корзину из слота. Отсутствие или поврежденные данные дают пустую корзину"""
    raw = storage.read(key)
    if not raw:
        return ()

    try:
        return deserialize_cart(raw)
    except ValueError as e:
        logger.warning(f"Corrupted cart data in slot {key}, dropping it: {e}")
        storage.delete(key)
        return ()


def save_cart(storage: SlotStorage, key: str, items: Cart) -> None:
    """Перезаписывает слот корзиной целиком"""
    storage.write(key, serialize_cart(items))
