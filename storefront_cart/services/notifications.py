import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .cart_store import CartResult, Operation, RejectReason, ResultStatus

logger = logging.getLogger(__name__)

# Тексты уведомлений для пользователя
OUT_OF_STOCK_ON_ADD = "Запрошенное количество отсутствует на складе"
OUT_OF_STOCK_ON_UPDATE = "Запрошенное количество отсутствует на складе"
ADD_FAILED = "Ошибка при добавлении товара"
REMOVE_FAILED = "Ошибка при удалении товара"
UPDATE_FAILED = "Ошибка при изменении количества товара"
CLEAR_FAILED = "Ошибка при очистке корзины"

_GENERIC_FAILURES = {
    Operation.ADD: ADD_FAILED,
    Operation.REMOVE: REMOVE_FAILED,
    Operation.UPDATE: UPDATE_FAILED,
    Operation.CLEAR: CLEAR_FAILED,
}

_OUT_OF_STOCK = {
    Operation.ADD: OUT_OF_STOCK_ON_ADD,
    Operation.UPDATE: OUT_OF_STOCK_ON_UPDATE,
}


@dataclass(frozen=True)
class Notification:
    kind: str
    message: str
    product_id: Optional[int] = None


def message_for(result: CartResult) -> Optional[Notification]:
    """Уведомление для пользователя по итогу операции (None, если сообщать нечего)"""
    if result.ok:
        return None

    if result.status == ResultStatus.REJECTED and result.reason == RejectReason.OUT_OF_STOCK:
        return Notification(
            kind=f"{result.operation.value}_out_of_stock",
            message=_OUT_OF_STOCK[result.operation],
            product_id=result.product_id
        )

    return Notification(
        kind=f"{result.operation.value}_failed",
        message=_GENERIC_FAILURES[result.operation],
        product_id=result.product_id
    )


class CartNotifier:
    """Доставляет уведомления об ошибках корзины через переданный канал.

    Без канала уведомления только пишутся в лог и нигде не накапливаются.
    """

    def __init__(self, sink: Optional[Callable[[Notification], None]] = None):
        self.sink = sink

    def notify(self, result: CartResult) -> Optional[Notification]:
        notification = message_for(result)
        if notification is None:
            return None

        logger.info(f"🔔 Notification {notification.kind} for product {notification.product_id}")
        if self.sink is not None:
            self.sink(notification)
        return notification
