"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_storefront_cart.db")
os.environ.setdefault("KAFKA_ENABLED", "false")

from storefront_cart.exceptions import CatalogLookupError, StockLookupError
from storefront_cart.schemas import Product, StockRecord
from storefront_cart.services.cart_store import CartStore
from storefront_cart.services.storage import InMemorySlotStorage

from tests.helpers import CART_KEY


@pytest.fixture
def stock_levels():
    """Остатки по товарам; тесты меняют словарь по месту"""
    return {1: 5, 2: 3, 3: 10}


@pytest.fixture
def catalog():
    """Каталог товаров"""
    return {
        1: Product(id=1, name="Shoe", price=100.0, image_url="https://img.example/1.jpg"),
        2: Product(id=2, name="Sneaker", price=139.9, image_url="https://img.example/2.jpg"),
        3: Product(id=3, name="Boot", price=250.0),
    }


@pytest.fixture
def mock_stock_client(stock_levels):
    """Mock stock client backed by stock_levels"""
    client = Mock()

    async def get_stock(product_id):
        if product_id not in stock_levels:
            raise StockLookupError(product_id, "status 404")
        return StockRecord(product_id=product_id, amount=stock_levels[product_id])

    client.get_stock = AsyncMock(side_effect=get_stock)
    return client


@pytest.fixture
def mock_catalog_client(catalog):
    """Mock catalog client backed by catalog"""
    client = Mock()

    async def get_product(product_id):
        if product_id not in catalog:
            raise CatalogLookupError(product_id, "not found")
        return catalog[product_id]

    client.get_product = AsyncMock(side_effect=get_product)
    return client


@pytest.fixture
def storage():
    return InMemorySlotStorage()


@pytest.fixture
def make_store(mock_stock_client, mock_catalog_client, storage):
    """Factory: store with the given initial cart"""
    def _make(*items):
        return CartStore(
            stock_client=mock_stock_client,
            catalog_client=mock_catalog_client,
            storage=storage,
            storage_key=CART_KEY,
            initial=tuple(items)
        )
    return _make


@pytest.fixture
def store(make_store):
    return make_store()
