from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.http.pagination import PaginationParams
from shared.http.responses import PaginationMeta
from shared.observability import oms_cascaded_orders_deleted_total, oms_customers_deleted_total

from .models import Customer
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerListItem, CustomerUpdate

logger = structlog.get_logger(__name__)


class CustomerService:

    @staticmethod
    async def create_customer(db: AsyncSession, data: CustomerCreate) -> Customer:
        customer = Customer(**data.model_dump())
        customer = await CustomerRepository.create(db, customer)
        logger.info("customer_created", customer_id=customer.id)
        return customer

    @staticmethod
    async def list_customers(
        db: AsyncSession, pagination: PaginationParams
    ) -> tuple[list[CustomerListItem], PaginationMeta]:
        rows = await CustomerRepository.list_page(db, pagination.offset, pagination.limit)
        total = await CustomerRepository.count(db)

        customers = []
        for customer, order_count in rows:
            item = CustomerListItem.model_validate(customer)
            item.order_count = order_count
            customers.append(item)
        return customers, pagination.meta(total)

    @staticmethod
    async def get_customer(db: AsyncSession, customer_id: str) -> Optional[Customer]:
        """Customer with all of its orders (newest first), each with its items."""
        return await CustomerRepository.get_with_orders(db, customer_id)

    @staticmethod
    async def update_customer(
        db: AsyncSession, customer_id: str, data: CustomerUpdate
    ) -> Optional[Customer]:
        customer = await CustomerRepository.get_by_id(db, customer_id)
        if customer is None:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(customer, field, value)

        customer = await CustomerRepository.update(db, customer)
        logger.info("customer_updated", customer_id=customer.id)
        return customer

    @staticmethod
    async def delete_customer(db: AsyncSession, customer_id: str) -> Optional[int]:
        """Delete a customer and, by cascade, its orders.

        Returns how many orders went with it, or None if the customer does not exist.
        """
        customer = await CustomerRepository.get_with_orders(db, customer_id)
        if customer is None:
            return None

        deleted_orders = len(customer.orders)
        await CustomerRepository.delete(db, customer)

        oms_customers_deleted_total.inc()
        oms_cascaded_orders_deleted_total.inc(deleted_orders)
        logger.info("customer_deleted", customer_id=customer_id, deleted_orders=deleted_orders)
        return deleted_orders
