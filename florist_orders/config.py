import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Database
    POSTGRES_CONNECTION_STRING: str = os.getenv("POSTGRES_CONNECTION_STRING", "")
    SQLITE_PATH: str = os.getenv("SQLITE_PATH", "./florist_orders.db")

    # API
    API_TOKEN: str = os.getenv("API_TOKEN", "")

    # Services: пустой адрес — букеты читаются из своей БД
    CATALOG_BASE_URL: str = os.getenv("CATALOG_BASE_URL", "")
    CATALOG_TIMEOUT: float = float(os.getenv("CATALOG_TIMEOUT", "5.0"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def DATABASE_URL(self) -> str:
        """Асинхронный URL для приложения"""
        if not self.POSTGRES_CONNECTION_STRING:
            return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"
        return self.POSTGRES_CONNECTION_STRING.replace("postgres://", "postgresql+asyncpg://")

    @property
    def SYNC_DATABASE_URL(self) -> str:
        """Синхронный URL для Alembic"""
        if not self.POSTGRES_CONNECTION_STRING:
            return f"sqlite:///{self.SQLITE_PATH}"
        return self.POSTGRES_CONNECTION_STRING.replace("postgres://", "postgresql://")


settings = Settings()
