import httpx
import logging
from typing import Optional

from ..config import settings
from ..exceptions import StockLookupError
from ..schemas.product import StockRecord

logger = logging.getLogger(__name__)


class StockClient:
    """Клиент сервиса остатков. Остатки не кешируются: каждый вызов идет в сеть"""

    def __init__(
            self,
            base_url: Optional[str] = None,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.stock_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.transport = transport

    async def get_stock(self, product_id: int) -> StockRecord:
        """Получить текущий остаток товара"""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(f"{self.base_url}/stock/{product_id}")
        except httpx.TimeoutException:
            logger.error(f"Timeout when fetching stock for product {product_id}")
            raise StockLookupError(product_id, "timeout")
        except httpx.HTTPError as e:
            logger.error(f"Error fetching stock for product {product_id}: {e}")
            raise StockLookupError(product_id, str(e))

        if response.status_code != 200:
            logger.error(f"Error fetching stock for product {product_id}: {response.status_code}")
            raise StockLookupError(product_id, f"status {response.status_code}")

        try:
            payload = response.json()
            if isinstance(payload, dict):
                # Некоторые API не возвращают id в ответе
                payload.setdefault("id", product_id)
            return StockRecord.model_validate(payload)
        except ValueError as e:
            logger.error(f"Malformed stock record for product {product_id}: {e}")
            raise StockLookupError(product_id, "malformed response")
