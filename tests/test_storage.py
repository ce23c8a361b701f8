"""
Tests for cart serialization and slot storage
"""

import json
import pytest
from sqlalchemy.orm import sessionmaker

from storefront_cart.database import Base, build_engine
from storefront_cart.models import StorageSlot
from storefront_cart.schemas import LineItem, deserialize_cart, serialize_cart
from storefront_cart.services.storage import InMemorySlotStorage, SqlSlotStorage, load_cart, save_cart
from tests.helpers import CART_KEY, line


@pytest.fixture
def session_factory(tmp_path):
    """SQLite database in a temporary file"""
    engine = build_engine(f"sqlite:///{tmp_path / 'cart.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


class TestSerialization:
    """Tests for serialize_cart / deserialize_cart."""

    def test_round_trip_keeps_order_and_amounts(self):
        cart = (
            line(3, 1, name="Boot", price=250.0),
            LineItem(id=1, name="Shoe", price=100.0, image_url="https://img.example/1.jpg", amount=4),
        )

        assert deserialize_cart(serialize_cart(cart)) == cart

    def test_uses_camel_case_image_field(self):
        raw = serialize_cart([LineItem(id=1, name="Shoe", price=100.0, image_url="a.jpg", amount=1)])

        assert json.loads(raw) == [
            {"id": 1, "name": "Shoe", "price": 100.0, "imageUrl": "a.jpg", "amount": 1}
        ]

    def test_rejects_zero_amount(self):
        with pytest.raises(ValueError):
            deserialize_cart('[{"id": 1, "name": "Shoe", "price": 1, "amount": 0}]')

    def test_rejects_duplicate_products(self):
        raw = json.dumps([
            {"id": 1, "name": "Shoe", "price": 1, "amount": 1},
            {"id": 1, "name": "Shoe", "price": 1, "amount": 2},
        ])

        with pytest.raises(ValueError):
            deserialize_cart(raw)


class TestLoadCart:
    """Tests for load_cart / save_cart."""

    def test_corrupted_slot_is_dropped(self):
        storage = InMemorySlotStorage({CART_KEY: "{not json"})

        assert load_cart(storage, CART_KEY) == ()
        assert storage.read(CART_KEY) is None

    def test_save_overwrites_whole_slot(self):
        storage = InMemorySlotStorage()
        save_cart(storage, CART_KEY, (line(1, 1), line(2, 2)))
        save_cart(storage, CART_KEY, (line(2, 2),))

        assert [i.id for i in load_cart(storage, CART_KEY)] == [2]


class TestSqlSlotStorage:
    """Tests for SqlSlotStorage."""

    def test_read_missing_slot(self, session_factory):
        assert SqlSlotStorage(session_factory).read(CART_KEY) is None

    def test_write_then_read(self, session_factory):
        storage = SqlSlotStorage(session_factory)

        storage.write(CART_KEY, "[]")
        storage.write(CART_KEY, '[{"id": 1}]')

        assert storage.read(CART_KEY) == '[{"id": 1}]'
        db = session_factory()
        try:
            assert db.query(StorageSlot).count() == 1
        finally:
            db.close()

    def test_delete(self, session_factory):
        storage = SqlSlotStorage(session_factory)
        storage.write(CART_KEY, "[]")

        storage.delete(CART_KEY)

        assert storage.read(CART_KEY) is None

    def test_cart_survives_new_storage_instance(self, session_factory):
        cart = (line(1, 2), line(2, 1, name="Sneaker", price=139.9))
        save_cart(SqlSlotStorage(session_factory), CART_KEY, cart)

        assert load_cart(SqlSlotStorage(session_factory), CART_KEY) == cart
