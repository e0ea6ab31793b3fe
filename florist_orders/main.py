import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from florist_orders.config import settings
from florist_orders.database import engine
from florist_orders.infrastructure.db_schema import metadata
from florist_orders.presentation.api import router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Таблицы проверены")

    yield

    await engine.dispose()
    logger.info("Приложение останавливается...")


app = FastAPI(
    title="Florist Order Service",
    description="Заказы цветочного магазина: снимки покупателя и букета, оплата, журнал действий",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router, prefix="/api")


@app.get("/health")
async def health():
    return {"status": "healthy"}
