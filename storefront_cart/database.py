from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings


def build_engine(database_url: str, echo: bool = False):
    """Создает движок SQLAlchemy для указанного URL"""
    if database_url.startswith("sqlite"):
        # SQLite используется из разных потоков (TestClient, uvicorn)
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo
        )

    # Используем обычный psycopg2 драйвер для синхронного кода
    database_url = database_url.replace("postgresql+asyncpg://", "postgresql+psycopg2://")
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=echo
    )


engine = build_engine(settings.database_url, echo=settings.debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def check_connection(session_factory=SessionLocal) -> bool:
    """Проверка подключения к БД"""
    db = session_factory()
    try:
        db.execute(text("SELECT 1"))
        return True
    finally:
        db.close()
