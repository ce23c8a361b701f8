"""Исключения внешних зависимостей корзины.

Все они перехватываются на границе CartStore и превращаются в результат
со статусом ``failed``; наружу из операций корзины они не выходят.
"""


class StorefrontCartError(Exception):
    """Базовая ошибка пакета"""


class StockLookupError(StorefrontCartError):
    """Не удалось получить остаток товара на складе"""

    def __init__(self, product_id: int, reason: str):
        self.product_id = product_id
        self.reason = reason
        super().__init__(f"Stock lookup for product {product_id} failed: {reason}")


class CatalogLookupError(StorefrontCartError):
    """Не удалось получить данные товара из каталога"""

    def __init__(self, product_id: int, reason: str):
        self.product_id = product_id
        self.reason = reason
        super().__init__(f"Catalog lookup for product {product_id} failed: {reason}")


class StorageError(StorefrontCartError):
    """Ошибка чтения или записи слота хранилища"""
