"""
Order lifecycle and the derived fields that come with it.

Money is handled in Decimal end to end. Unit prices are rounded half-up to
cents before they are multiplied, so an item's total_price is exactly
quantity * unit_price as stored, and an order's total_amount is exactly the
sum of its items.

Order numbers are ORD-<year>-<6-digit sequence>. The sequence is a per-year
counter row bumped in the same transaction that inserts the order.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.customer_service.repository import CustomerRepository
from shared.http.errors import NotFoundError
from shared.http.pagination import PaginationParams
from shared.http.responses import PaginationMeta
from shared.observability import oms_order_amount, oms_orders_created_total

from .models import Order, OrderItem, OrderStatus
from .pricing import to_money
from .repository import OrderRepository
from .schemas import OrderCreate, OrderItemCreate, OrderUpdate

logger = structlog.get_logger(__name__)


def format_order_number(year: int, sequence: int) -> str:
    return f"ORD-{year}-{sequence:06d}"


def build_items(items: Iterable[OrderItemCreate]) -> list[OrderItem]:
    built = []
    for position, item in enumerate(items):
        unit_price = to_money(item.unit_price)
        built.append(
            OrderItem(
                position=position,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=unit_price,
                total_price=unit_price * item.quantity,
            )
        )
    return built


def order_total(items: Iterable[OrderItem]) -> Decimal:
    return sum((item.total_price for item in items), Decimal("0.00"))


class OrderService:

    @staticmethod
    async def create_order(db: AsyncSession, data: OrderCreate) -> Order:
        customer = await CustomerRepository.get_by_id(db, data.customer_id)
        if customer is None:
            raise NotFoundError("Customer")

        items = build_items(data.items)
        total = order_total(items)
        year = datetime.now(timezone.utc).year

        sequence = await OrderRepository.next_sequence(db, year)
        order = Order(
            order_number=format_order_number(year, sequence),
            customer_id=customer.id,
            status=data.status,
            notes=data.notes,
            total_amount=total,
            items=items,
        )
        await OrderRepository.add(db, order)
        await db.commit()

        oms_orders_created_total.labels(status=order.status.value).inc()
        oms_order_amount.observe(float(total))
        logger.info(
            "order_created",
            order_id=order.id,
            order_number=order.order_number,
            customer_id=customer.id,
            item_count=len(items),
            total_amount=str(total),
        )
        return await OrderRepository.get_order(db, order.id)

    @staticmethod
    async def list_orders(
        db: AsyncSession,
        pagination: PaginationParams,
        status: Optional[OrderStatus] = None,
        customer_id: Optional[str] = None,
    ) -> tuple[list[Order], PaginationMeta]:
        orders = await OrderRepository.list_page(
            db, pagination.offset, pagination.limit, status=status, customer_id=customer_id
        )
        total = await OrderRepository.count(db, status=status, customer_id=customer_id)
        return orders, pagination.meta(total)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: str) -> Optional[Order]:
        return await OrderRepository.get_order(db, order_id)

    @staticmethod
    async def update_order(db: AsyncSession, order_id: str, data: OrderUpdate) -> Optional[Order]:
        order = await OrderRepository.get_order(db, order_id)
        if order is None:
            return None

        changes = data.model_dump(exclude_unset=True, exclude={"items", "customer_id"})
        for field, value in changes.items():
            setattr(order, field, value)

        if data.customer_id is not None and data.customer_id != order.customer_id:
            customer = await CustomerRepository.get_by_id(db, data.customer_id)
            if customer is None:
                raise NotFoundError("Customer")
            order.customer_id = customer.id

        if data.items is not None:
            # Old items are orphaned and deleted on flush; one commit covers both
            order.items = build_items(data.items)
            order.total_amount = order_total(order.items)

        await db.commit()
        logger.info(
            "order_updated",
            order_id=order.id,
            fields=sorted(data.model_dump(exclude_unset=True).keys()),
        )
        return await OrderRepository.get_order(db, order.id)

    @staticmethod
    async def delete_order(db: AsyncSession, order_id: str) -> bool:
        order = await OrderRepository.get_order(db, order_id)
        if order is None:
            return False

        await OrderRepository.delete(db, order)
        logger.info("order_deleted", order_id=order_id, order_number=order.order_number)
        return True
