import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from florist_orders.database import get_db
from florist_orders.presentation.schemas import (
    CreateOrderRequest, UpdateOrderRequest, OrderResponse, ErrorResponse, ErrorDetail
)
from florist_orders.application.create_order import CreateOrderUseCase, CreateOrderDTO
from florist_orders.application.update_order import UpdateOrderUseCase, UpdateOrderDTO
from florist_orders.application.list_orders import ListOrdersUseCase
from florist_orders.application.get_order import GetOrderUseCase
from florist_orders.application.delete_order import DeleteOrderUseCase
from florist_orders.application.order_stats import (
    RecentOrderStatsUseCase, RecentOrderStats, OrderSummaryUseCase, OrderSummary
)
from florist_orders.application.interfaces import ProductLookup
from florist_orders.domain.exceptions import DomainException, OrderNotFoundError
from florist_orders.infrastructure.unit_of_work import UnitOfWork
from florist_orders.infrastructure.repositories import SQLAlchemyBouquetRepository
from florist_orders.infrastructure.http_clients import HTTPCatalogClient
from florist_orders.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


# Фабрики для создания use cases
def get_unit_of_work(db: AsyncSession = Depends(get_db)):
    return UnitOfWork(lambda: db)


def get_catalog(db: AsyncSession = Depends(get_db)) -> ProductLookup:
    if settings.CATALOG_BASE_URL:
        return HTTPCatalogClient(settings.CATALOG_BASE_URL, settings.API_TOKEN, settings.CATALOG_TIMEOUT)
    return SQLAlchemyBouquetRepository(db)


def get_create_order_use_case(uow=Depends(get_unit_of_work), catalog=Depends(get_catalog)):
    return CreateOrderUseCase(uow, catalog)


def get_update_order_use_case(uow=Depends(get_unit_of_work), catalog=Depends(get_catalog)):
    return UpdateOrderUseCase(uow, catalog)


def get_list_orders_use_case(uow=Depends(get_unit_of_work)):
    return ListOrdersUseCase(uow)


def get_get_order_use_case(uow=Depends(get_unit_of_work)):
    return GetOrderUseCase(uow)


def get_delete_order_use_case(uow=Depends(get_unit_of_work)):
    return DeleteOrderUseCase(uow)


def get_recent_stats_use_case(uow=Depends(get_unit_of_work)):
    return RecentOrderStatsUseCase(uow)


def get_summary_use_case(uow=Depends(get_unit_of_work)):
    return OrderSummaryUseCase(uow)


def _error(status_code: int, e: DomainException) -> HTTPException:
    """Ошибка с указанием нарушенного правила и поля для UI"""
    detail = ErrorDetail(message=str(e), code=e.code, field=e.field)
    return HTTPException(status_code=status_code, detail=detail.model_dump())


def _unavailable(e: Exception) -> HTTPException:
    logger.error(f"Ошибка хранилища: {e}", exc_info=True)
    detail = ErrorDetail(message=f"Service unavailable: {str(e)}", code="service_unavailable")
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail.model_dump())


@router.post(
    "/orders",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def create_order(
    request: CreateOrderRequest,
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case)
):
    """Создать новый заказ"""
    try:
        order = await use_case(CreateOrderDTO(**request.model_dump()))
        return OrderResponse.from_domain(order)
    except DomainException as e:
        raise _error(status.HTTP_400_BAD_REQUEST, e)
    except Exception as e:
        raise _unavailable(e)


@router.get("/orders", response_model=List[OrderResponse])
async def list_orders(
    q: Optional[str] = None,
    limit: Optional[str] = None,
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case)
):
    """Последние заказы с поиском по имени или телефону"""
    orders = await use_case(search=q, limit=limit)
    return [OrderResponse.from_domain(order) for order in orders]


@router.get("/orders/stats/recent", response_model=RecentOrderStats)
async def recent_order_stats(
    product_id: Optional[str] = None,
    use_case: RecentOrderStatsUseCase = Depends(get_recent_stats_use_case)
):
    """Заказы за последние сутки (публичная статистика)"""
    return await use_case(product_id)


@router.get("/orders/stats/summary", response_model=OrderSummary)
async def order_summary(use_case: OrderSummaryUseCase = Depends(get_summary_use_case)):
    """Сводка по статусам, оплате и выручке"""
    return await use_case()


@router.get(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_order(
    order_id: str,
    use_case: GetOrderUseCase = Depends(get_get_order_use_case)
):
    """Получить заказ по ID"""
    try:
        order = await use_case(order_id)
        return OrderResponse.from_domain(order)
    except OrderNotFoundError as e:
        raise _error(status.HTTP_404_NOT_FOUND, e)


@router.patch(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_order(
    order_id: str,
    request: UpdateOrderRequest,
    use_case: UpdateOrderUseCase = Depends(get_update_order_use_case)
):
    """Частично обновить заказ"""
    try:
        patch = UpdateOrderDTO(**request.model_dump(exclude_unset=True))
        order = await use_case(order_id, patch)
        return OrderResponse.from_domain(order)
    except OrderNotFoundError as e:
        raise _error(status.HTTP_404_NOT_FOUND, e)
    except DomainException as e:
        raise _error(status.HTTP_400_BAD_REQUEST, e)
    except Exception as e:
        raise _unavailable(e)


@router.delete(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}}
)
async def delete_order(
    order_id: str,
    use_case: DeleteOrderUseCase = Depends(get_delete_order_use_case)
):
    """Удалить заказ"""
    try:
        order = await use_case(order_id)
        return OrderResponse.from_domain(order)
    except OrderNotFoundError as e:
        raise _error(status.HTTP_404_NOT_FOUND, e)
    except Exception as e:
        raise _unavailable(e)
