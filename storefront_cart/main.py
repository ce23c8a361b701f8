import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .database import engine, Base, SessionLocal, check_connection
from .api.routes.cart import router as cart_router
from .events.publisher import CartEventPublisher
from .services.cart_store import CartStore
from .services.catalog_client import CatalogClient
from .services.notifications import CartNotifier
from .services.stock_client import StockClient
from .services.storage import SqlSlotStorage

# Настройка логирования
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_cart_store() -> CartStore:
    """Собирает корзину из настроек и восстанавливает ее из БД"""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)

    return CartStore.load(
        stock_client=StockClient(),
        catalog_client=CatalogClient(),
        storage=SqlSlotStorage(SessionLocal),
        storage_key=settings.cart_storage_key
    )


def create_app(store: Optional[CartStore] = None, notifier: Optional[CartNotifier] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        # Startup
        logger.info(f"Starting {settings.app_name}...")

        publisher: Optional[CartEventPublisher] = None
        try:
            if getattr(app.state, "cart_store", None) is None:
                app.state.cart_store = build_cart_store()

            if settings.kafka_enabled:
                logger.info("Starting Kafka producer...")
                publisher = CartEventPublisher(
                    topic=settings.kafka_cart_topic,
                    cart_key=settings.cart_storage_key,
                    bootstrap_servers=settings.kafka_bootstrap_servers
                )
                await publisher.start()
                unsubscribe = app.state.cart_store.subscribe(publisher)

            logger.info(f"✅ {settings.app_name} started successfully!")

            yield  # Приложение работает

        except Exception as e:
            logger.error(f"❌ Failed to start {settings.app_name}: {e}")
            raise

        # Shutdown
        logger.info(f"Shutting down {settings.app_name}...")

        if publisher is not None:
            unsubscribe()
            try:
                await publisher.stop()
            except Exception as e:
                logger.error(f"Error stopping Kafka publisher: {e}")

        logger.info(f"✅ {settings.app_name} shut down successfully!")

    app = FastAPI(
        title=settings.app_name,
        description="Корзина покупок витрины с проверкой остатков",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.cart_store = store
    app.state.notifier = notifier or CartNotifier()

    # Middleware для CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # В production указать конкретные домены
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    # Подключаем роуты
    app.include_router(cart_router, prefix="/api/v1", tags=["cart"])

    @app.get("/health")
    async def health_check():
        """Проверка здоровья сервиса"""
        try:
            if isinstance(app.state.cart_store.storage, SqlSlotStorage):
                try:
                    check_connection(app.state.cart_store.storage.session_factory)
                    storage_status = "connected"
                except Exception as e:
                    logger.error(f"Database check failed: {e}")
                    storage_status = "disconnected"
            else:
                storage_status = "in-memory"

            return {
                "status": "healthy",
                "service": settings.app_name,
                "storage": storage_status,
                "cart_items": len(app.state.cart_store.get_snapshot()),
                "version": "1.0.0"
            }
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            raise HTTPException(status_code=503, detail="Service unhealthy")

    @app.get("/")
    async def root():
        """Корневой endpoint"""
        return {
            "service": settings.app_name,
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "health": "/health",
                "docs": "/docs",
                "cart": "/api/v1/cart"
            }
        }

    @app.exception_handler(500)
    async def internal_error_handler(request, exc):
        logger.error(f"Internal server error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": "Something went wrong"}
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront_cart.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="info"
    )
