from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.http import responses
from shared.http.pagination import PaginationParams, get_pagination
from shared.http.responses import ApiResponse
from shared.security import get_current_user

from .models import OrderStatus
from .schemas import OrderCreate, OrderListItem, OrderResponse, OrderUpdate
from .service import OrderService

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
    dependencies=[Depends(get_current_user)],
)


@router.post(
    "",
    response_model=ApiResponse[OrderResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an order with its items",
)
async def create_order(payload: OrderCreate, db: AsyncSession = Depends(get_db)):
    order = await OrderService.create_order(db, payload)
    return responses.success(
        "Order created successfully",
        OrderResponse.model_validate(order),
        status_code=status.HTTP_201_CREATED,
    )


@router.get(
    "",
    response_model=ApiResponse[List[OrderListItem]],
    summary="List orders, optionally filtered by status and customer",
)
async def list_orders(
    pagination: PaginationParams = Depends(get_pagination),
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    customer_id: Optional[str] = Query(None, alias="customerId"),
    db: AsyncSession = Depends(get_db),
):
    orders, meta = await OrderService.list_orders(
        db, pagination, status=order_status, customer_id=customer_id
    )
    return responses.success(
        "Orders retrieved successfully",
        [OrderListItem.model_validate(order) for order in orders],
        pagination=meta,
    )


@router.get(
    "/{order_id}",
    response_model=ApiResponse[OrderResponse],
    summary="Get an order with its customer and items",
)
async def get_order(order_id: str, db: AsyncSession = Depends(get_db)):
    order = await OrderService.get_order(db, order_id)
    if not order:
        return responses.not_found("Order")
    return responses.success("Order retrieved successfully", OrderResponse.model_validate(order))


@router.put(
    "/{order_id}",
    response_model=ApiResponse[OrderResponse],
    summary="Update an order (items, when given, replace the existing ones)",
)
async def update_order(order_id: str, payload: OrderUpdate, db: AsyncSession = Depends(get_db)):
    order = await OrderService.update_order(db, order_id, payload)
    if not order:
        return responses.not_found("Order")
    return responses.success("Order updated successfully", OrderResponse.model_validate(order))


@router.delete(
    "/{order_id}",
    response_model=ApiResponse[None],
    summary="Delete an order and its items",
)
async def delete_order(order_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await OrderService.delete_order(db, order_id)
    if not deleted:
        return responses.not_found("Order")
    return responses.success("Order deleted successfully")
