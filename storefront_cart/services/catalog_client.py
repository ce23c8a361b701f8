import httpx
import logging
from typing import Optional

from ..config import settings
from ..exceptions import CatalogLookupError
from ..schemas.product import Product

logger = logging.getLogger(__name__)


class CatalogClient:
    """Клиент для взаимодействия с каталогом товаров"""

    def __init__(
            self,
            base_url: Optional[str] = None,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.catalog_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.transport = transport

    async def get_product(self, product_id: int) -> Product:
        """Получить информацию о товаре"""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(f"{self.base_url}/products/{product_id}")
        except httpx.TimeoutException:
            logger.error(f"Timeout when fetching product {product_id}")
            raise CatalogLookupError(product_id, "timeout")
        except httpx.HTTPError as e:
            logger.error(f"Error fetching product {product_id}: {e}")
            raise CatalogLookupError(product_id, str(e))

        if response.status_code == 404:
            logger.warning(f"Product {product_id} not found")
            raise CatalogLookupError(product_id, "not found")
        if response.status_code != 200:
            logger.error(f"Error fetching product {product_id}: {response.status_code}")
            raise CatalogLookupError(product_id, f"status {response.status_code}")

        try:
            return Product.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Malformed catalog record for product {product_id}: {e}")
            raise CatalogLookupError(product_id, "malformed response")
