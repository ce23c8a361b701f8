import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..schemas.cart import Cart, CartSummary, LineItem, summarize
from .catalog_client import CatalogClient
from .stock_client import StockClient
from .storage import SlotStorage, load_cart, save_cart

logger = logging.getLogger(__name__)

CartListener = Callable[[Cart], None]


class Operation(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"
    CLEAR = "clear"


class ResultStatus(str, Enum):
    COMMITTED = "committed"
    IGNORED = "ignored"
    REJECTED = "rejected"
    FAILED = "failed"


class RejectReason(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    NOT_IN_CART = "not_in_cart"


@dataclass(frozen=True)
class CartResult:
    """Итог операции над корзиной.

    ``cart`` всегда содержит актуальное состояние после операции: новое при
    ``committed`` и прежнее во всех остальных случаях.
    """
    operation: Operation
    status: ResultStatus
    cart: Cart
    product_id: Optional[int] = None
    reason: Optional[RejectReason] = None
    fault: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status in (ResultStatus.COMMITTED, ResultStatus.IGNORED)


class CartStore:
    """Единственный владелец корзины сессии.

    Все изменения проходят через одну блокировку: каждая операция читает
    последнюю зафиксированную корзину уже после захвата блокировки, поэтому
    два быстрых добавления одного товара проверяются против остатка по очереди.
    Фиксация: запись в слот хранилища, затем замена состояния и рассылка
    подписчикам. При любой ошибке состояние не меняется.
    """

    def __init__(
            self,
            stock_client: StockClient,
            catalog_client: CatalogClient,
            storage: SlotStorage,
            storage_key: str,
            initial: Cart = ()
    ):
        self.stock_client = stock_client
        self.catalog_client = catalog_client
        self.storage = storage
        self.storage_key = storage_key
        self._cart: Cart = tuple(initial)
        self._listeners: List[CartListener] = []
        self._lock = asyncio.Lock()

    @classmethod
    def load(
            cls,
            stock_client: StockClient,
            catalog_client: CatalogClient,
            storage: SlotStorage,
            storage_key: str
    ) -> "CartStore":
        """Создает хранилище, восстановив корзину из слота"""
        cart = load_cart(storage, storage_key)
        logger.info(f"Cart loaded from slot {storage_key}: {len(cart)} items")
        return cls(stock_client, catalog_client, storage, storage_key, initial=cart)

    def get_snapshot(self) -> Cart:
        return self._cart

    def summary(self) -> CartSummary:
        return summarize(self._cart)

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Подписка на зафиксированные изменения. Возвращает функцию отписки"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def add_product(self, product_id: int) -> CartResult:
        """Добавить одну единицу товара"""
        async with self._lock:
            cart = self._cart
            try:
                existing = _find(cart, product_id)
                next_amount = (existing.amount if existing else 0) + 1

                stock = await self.stock_client.get_stock(product_id)
                if next_amount > stock.amount:
                    logger.info(
                        f"Product {product_id} out of stock: requested {next_amount}, available {stock.amount}"
                    )
                    return self._rejected(Operation.ADD, product_id, RejectReason.OUT_OF_STOCK)

                if existing:
                    new_cart = _replace_amount(cart, product_id, next_amount)
                else:
                    product = await self.catalog_client.get_product(product_id)
                    item = LineItem(
                        id=product_id,
                        name=product.name,
                        price=product.price,
                        image_url=product.image_url,
                        amount=1
                    )
                    new_cart = cart + (item,)

                self._commit(new_cart)
            except Exception as e:
                return self._failed(Operation.ADD, product_id, e)

            logger.info(f"Added product {product_id} to cart (amount {next_amount})")
            return self._committed(Operation.ADD, product_id)

    async def remove_product(self, product_id: int) -> CartResult:
        """Удалить позицию целиком"""
        async with self._lock:
            cart = self._cart
            if _find(cart, product_id) is None:
                logger.warning(f"Product {product_id} is not in cart, nothing to remove")
                return self._rejected(Operation.REMOVE, product_id, RejectReason.NOT_IN_CART)

            try:
                self._commit(tuple(item for item in cart if item.id != product_id))
            except Exception as e:
                return self._failed(Operation.REMOVE, product_id, e)

            logger.info(f"Removed product {product_id} from cart")
            return self._committed(Operation.REMOVE, product_id)

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """Установить количество товара, уже лежащего в корзине"""
        if amount <= 0:
            return CartResult(Operation.UPDATE, ResultStatus.IGNORED, self._cart, product_id)

        async with self._lock:
            cart = self._cart
            try:
                stock = await self.stock_client.get_stock(product_id)
                if amount > stock.amount:
                    logger.info(
                        f"Product {product_id} out of stock: requested {amount}, available {stock.amount}"
                    )
                    return self._rejected(Operation.UPDATE, product_id, RejectReason.OUT_OF_STOCK)

                if _find(cart, product_id) is None:
                    logger.warning(f"Product {product_id} is not in cart, nothing to update")
                    return self._rejected(Operation.UPDATE, product_id, RejectReason.NOT_IN_CART)

                self._commit(_replace_amount(cart, product_id, amount))
            except Exception as e:
                return self._failed(Operation.UPDATE, product_id, e)

            logger.info(f"Updated product {product_id} amount to {amount}")
            return self._committed(Operation.UPDATE, product_id)

    async def clear(self) -> CartResult:
        """Очистить корзину"""
        async with self._lock:
            try:
                self._commit(())
            except Exception as e:
                return self._failed(Operation.CLEAR, None, e)

            logger.info("🧹 Cart cleared")
            return self._committed(Operation.CLEAR, None)

    def _commit(self, new_cart: Cart):
        # Сначала слот: если запись упала, состояние в памяти не трогаем
        save_cart(self.storage, self.storage_key, new_cart)
        self._cart = new_cart

        for listener in list(self._listeners):
            try:
                listener(new_cart)
            except Exception as e:
                logger.error(f"Cart listener {listener!r} failed: {e}")

    def _committed(self, operation: Operation, product_id: Optional[int]) -> CartResult:
        return CartResult(operation, ResultStatus.COMMITTED, self._cart, product_id)

    def _rejected(self, operation: Operation, product_id: int, reason: RejectReason) -> CartResult:
        return CartResult(operation, ResultStatus.REJECTED, self._cart, product_id, reason=reason)

    def _failed(self, operation: Operation, product_id: Optional[int], fault: Exception) -> CartResult:
        logger.error(f"❌ Cart {operation.value} failed for product {product_id}: {fault}")
        return CartResult(operation, ResultStatus.FAILED, self._cart, product_id, fault=fault)


def _find(cart: Cart, product_id: int) -> Optional[LineItem]:
    return next((item for item in cart if item.id == product_id), None)


def _replace_amount(cart: Cart, product_id: int, amount: int) -> Cart:
    return tuple(
        item.model_copy(update={"amount": amount}) if item.id == product_id else item
        for item in cart
    )
