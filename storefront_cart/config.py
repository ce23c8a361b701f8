from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Настройки приложения"""

    # Основные настройки приложения
    app_name: str = "Storefront Cart"
    debug: bool = False
    log_level: str = "INFO"

    # Хранилище корзины (ключ-значение)
    database_url: str = "sqlite:///./storefront_cart.db"
    cart_storage_key: str = "@RocketShoes:cart"

    # Настройки внешних сервисов
    stock_service_url: str = "http://localhost:3333"
    catalog_service_url: str = "http://localhost:3333"
    http_timeout: float = 5.0

    # Настройки Kafka
    kafka_enabled: bool = False
    kafka_bootstrap_servers: str = "localhost:9092"
    kafka_cart_topic: str = "cart.updated"

    class Config:
        env_file = ".env"
        case_sensitive = False
        # Разрешаем дополнительные поля из переменных окружения
        extra = "ignore"


# Создаем экземпляр настроек
settings = Settings()
