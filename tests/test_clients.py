"""
Tests for stock and catalog HTTP clients
"""

import httpx
import pytest

from storefront_cart.exceptions import CatalogLookupError, StockLookupError
from storefront_cart.services.catalog_client import CatalogClient
from storefront_cart.services.stock_client import StockClient

BASE_URL = "http://api.test"


def transport_for(handler):
    return httpx.MockTransport(handler)


class TestStockClient:
    """Tests for StockClient."""

    @pytest.mark.asyncio
    async def test_get_stock(self):
        def handler(request):
            assert request.url.path == "/stock/1"
            return httpx.Response(200, json={"id": 1, "amount": 3})

        client = StockClient(base_url=BASE_URL, transport=transport_for(handler))
        stock = await client.get_stock(1)

        assert stock.product_id == 1
        assert stock.amount == 3

    @pytest.mark.asyncio
    async def test_stock_without_id(self):
        client = StockClient(
            base_url=BASE_URL,
            transport=transport_for(lambda request: httpx.Response(200, json={"amount": 2}))
        )

        stock = await client.get_stock(7)

        assert stock.product_id == 7
        assert stock.amount == 2

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        client = StockClient(
            base_url=BASE_URL,
            transport=transport_for(lambda request: httpx.Response(500))
        )

        with pytest.raises(StockLookupError):
            await client.get_stock(1)

    @pytest.mark.asyncio
    async def test_negative_amount_is_malformed(self):
        client = StockClient(
            base_url=BASE_URL,
            transport=transport_for(lambda request: httpx.Response(200, json={"id": 1, "amount": -1}))
        )

        with pytest.raises(StockLookupError):
            await client.get_stock(1)

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = StockClient(base_url=BASE_URL, transport=transport_for(handler))

        with pytest.raises(StockLookupError) as exc_info:
            await client.get_stock(1)
        assert exc_info.value.reason == "timeout"


class TestCatalogClient:
    """Tests for CatalogClient."""

    @pytest.mark.asyncio
    async def test_get_product(self):
        def handler(request):
            assert request.url.path == "/products/1"
            return httpx.Response(200, json={
                "id": 1, "name": "Shoe", "price": 100, "imageUrl": "a.jpg", "color": "red"
            })

        client = CatalogClient(base_url=BASE_URL + "/", transport=transport_for(handler))
        product = await client.get_product(1)

        assert product.name == "Shoe"
        assert product.price == 100.0
        assert product.image_url == "a.jpg"

    @pytest.mark.asyncio
    async def test_title_and_image_fields(self):
        client = CatalogClient(
            base_url=BASE_URL,
            transport=transport_for(lambda request: httpx.Response(200, json={
                "id": 2, "title": "Sneaker", "price": 139.9, "image": "b.jpg"
            }))
        )

        product = await client.get_product(2)

        assert product.name == "Sneaker"
        assert product.image_url == "b.jpg"

    @pytest.mark.asyncio
    async def test_not_found_raises(self):
        client = CatalogClient(
            base_url=BASE_URL,
            transport=transport_for(lambda request: httpx.Response(404))
        )

        with pytest.raises(CatalogLookupError) as exc_info:
            await client.get_product(5)
        assert exc_info.value.reason == "not found"

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = CatalogClient(base_url=BASE_URL, transport=transport_for(handler))

        with pytest.raises(CatalogLookupError):
            await client.get_product(1)
