from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.http import responses
from shared.http.pagination import PaginationParams, get_pagination
from shared.http.responses import ApiResponse
from shared.security import get_current_user

from .schemas import (
    CustomerCreate,
    CustomerDetailResponse,
    CustomerListItem,
    CustomerResponse,
    CustomerUpdate,
)
from .service import CustomerService

# Every customer route requires a bearer token
router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
    dependencies=[Depends(get_current_user)],
)


@router.post(
    "",
    response_model=ApiResponse[CustomerResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new customer",
)
async def create_customer(payload: CustomerCreate, db: AsyncSession = Depends(get_db)):
    customer = await CustomerService.create_customer(db, payload)
    return responses.success(
        "Customer created successfully",
        CustomerResponse.model_validate(customer),
        status_code=status.HTTP_201_CREATED,
    )


@router.get(
    "",
    response_model=ApiResponse[List[CustomerListItem]],
    summary="List customers with pagination",
)
async def list_customers(
    pagination: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
):
    customers, meta = await CustomerService.list_customers(db, pagination)
    return responses.success("Customers retrieved successfully", customers, pagination=meta)


@router.get(
    "/{customer_id}",
    response_model=ApiResponse[CustomerDetailResponse],
    summary="Get a customer with their orders",
)
async def get_customer(customer_id: str, db: AsyncSession = Depends(get_db)):
    customer = await CustomerService.get_customer(db, customer_id)
    if not customer:
        return responses.not_found("Customer")
    return responses.success(
        "Customer retrieved successfully", CustomerDetailResponse.model_validate(customer)
    )


@router.put(
    "/{customer_id}",
    response_model=ApiResponse[CustomerResponse],
    summary="Update a customer (partial)",
)
async def update_customer(
    customer_id: str, payload: CustomerUpdate, db: AsyncSession = Depends(get_db)
):
    customer = await CustomerService.update_customer(db, customer_id, payload)
    if not customer:
        return responses.not_found("Customer")
    return responses.success(
        "Customer updated successfully", CustomerResponse.model_validate(customer)
    )


@router.delete(
    "/{customer_id}",
    response_model=ApiResponse[dict],
    summary="Delete a customer and their orders",
)
async def delete_customer(customer_id: str, db: AsyncSession = Depends(get_db)):
    deleted_orders = await CustomerService.delete_customer(db, customer_id)
    if deleted_orders is None:
        return responses.not_found("Customer")

    if deleted_orders > 0:
        message = f"Customer and {deleted_orders} associated orders deleted successfully"
    else:
        message = "Customer deleted successfully"
    return responses.success(message, {"deletedOrdersCount": deleted_orders})
