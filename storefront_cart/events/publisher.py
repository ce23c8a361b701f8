import asyncio
import logging
from typing import Optional

from aiokafka import AIOKafkaProducer
from aiokafka.errors import KafkaError

from ..schemas.cart import Cart
from ..schemas.events import CartUpdatedEvent

logger = logging.getLogger(__name__)


class CartEventPublisher:
    """Подписчик CartStore: пересылает каждую зафиксированную корзину в Kafka.

    Подписчики вызываются синхронно внутри фиксации, поэтому снимки кладутся
    в очередь, а отправкой занимается фоновая задача.
    """

    def __init__(
            self,
            topic: str,
            cart_key: str,
            bootstrap_servers: Optional[str] = None,
            producer: Optional[AIOKafkaProducer] = None
    ):
        self.topic = topic
        self.cart_key = cart_key
        self.bootstrap_servers = bootstrap_servers
        self.producer = producer
        self.queue: "asyncio.Queue[Cart]" = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None

    def __call__(self, cart: Cart) -> None:
        self.queue.put_nowait(cart)

    async def start(self):
        if self.producer is None:
            # Ключ корзины один, порядок событий сохраняется в партиции
            self.producer = AIOKafkaProducer(
                bootstrap_servers=self.bootstrap_servers,
                acks="all",
                enable_idempotence=True
            )
        await self.producer.start()
        self._task = asyncio.create_task(self._run())
        logger.info(f"Cart event publisher started (topic {self.topic})")

    async def stop(self):
        if self._task:
            # Досылаем то, что уже в очереди
            await self.queue.join()
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self.producer is not None:
            await self.producer.stop()
            self.producer = None
            logger.info("Cart event publisher stopped")

    async def publish(self, cart: Cart) -> bool:
        if self.producer is None:
            logger.error("Kafka producer not started")
            return False

        event = CartUpdatedEvent.from_cart(self.cart_key, cart)
        try:
            record = await self.producer.send_and_wait(
                self.topic,
                value=event.model_dump_json(by_alias=True).encode("utf-8"),
                key=self.cart_key.encode("utf-8")
            )
        except KafkaError as e:
            logger.error(f"❌ Error publishing cart event {event.event_id}: {e}")
            return False

        logger.info(f"✅ Cart event {event.event_id} published (offset {record.offset})")
        return True

    async def _run(self):
        while True:
            cart = await self.queue.get()
            try:
                await self.publish(cart)
            except Exception as e:
                logger.error(f"❌ Error publishing cart event: {e}")
            finally:
                self.queue.task_done()
