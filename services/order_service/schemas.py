from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from services.customer_service.schemas import CustomerResponse, CustomerSummary
from shared.http.responses import CamelModel

from .models import OrderStatus
from .pricing import MAX_UNIT_PRICE, to_money


class OrderItemCreate(CamelModel):
    product_name: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, strict=True)
    unit_price: float = Field(..., gt=0, lt=MAX_UNIT_PRICE, strict=True, allow_inf_nan=False)

    @field_validator("unit_price")
    @classmethod
    def at_least_one_cent(cls, v):
        # Stored rounded to cents; a price that rounds to 0.00 is not positive
        if to_money(v) <= 0:
            raise ValueError("Input should be at least 0.01")
        return v


class OrderCreate(CamelModel):
    customer_id: str = Field(..., min_length=1)
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None
    items: List[OrderItemCreate] = Field(..., min_length=1)


class OrderUpdate(CamelModel):
    """Partial update. `items`, when present, replaces the whole item list."""

    customer_id: Optional[str] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None
    notes: Optional[str] = None
    items: Optional[List[OrderItemCreate]] = Field(None, min_length=1)

    @field_validator("customer_id", "status", "items", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class OrderItemResponse(CamelModel):
    id: str
    order_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float


class OrderBase(CamelModel):
    id: str
    order_number: str
    status: OrderStatus
    total_amount: float
    notes: Optional[str] = None
    customer_id: str
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemResponse] = []


class OrderResponse(OrderBase):
    customer: CustomerResponse


class OrderListItem(OrderBase):
    customer: CustomerSummary
