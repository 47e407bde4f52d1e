from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from services.order_service.models import OrderStatus
from shared.http.responses import CamelModel


class CustomerCreate(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None


class CustomerUpdate(CamelModel):
    """Partial update: only the fields present in the body are applied."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("first_name", "last_name", "email", mode="before")
    @classmethod
    def reject_null(cls, v):
        # Omitting a field leaves it unchanged; null would blank a required column
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class CustomerSummary(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str


class CustomerResponse(CustomerSummary):
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CustomerListItem(CustomerResponse):
    order_count: int = 0


class CustomerOrderItem(CamelModel):
    id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float


class CustomerOrder(CamelModel):
    id: str
    order_number: str
    status: OrderStatus
    total_amount: float
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    items: List[CustomerOrderItem] = []


class CustomerDetailResponse(CustomerResponse):
    orders: List[CustomerOrder] = []
