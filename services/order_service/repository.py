from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Order, OrderSequence, OrderStatus


class OrderRepository:
    """Data access for orders. Methods that take part in a larger unit of work
    only flush; the service decides when to commit."""

    @staticmethod
    async def next_sequence(db: AsyncSession, year: int) -> int:
        # Row lock on PostgreSQL; SQLite serialises writers on its own
        result = await db.execute(
            select(OrderSequence).where(OrderSequence.year == year).with_for_update()
        )
        sequence = result.scalars().first()
        if sequence is None:
            sequence = OrderSequence(year=year, last_value=0)
            db.add(sequence)

        sequence.last_value += 1
        await db.flush()
        return sequence.last_value

    @staticmethod
    async def add(db: AsyncSession, order: Order) -> Order:
        db.add(order)
        await db.flush()
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: str) -> Optional[Order]:
        # customer and items are selectin-loaded by the mapper
        result = await db.execute(
            select(Order)
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    @staticmethod
    def _filtered(stmt, status: Optional[OrderStatus], customer_id: Optional[str]):
        if status:
            stmt = stmt.where(Order.status == status)
        if customer_id:
            stmt = stmt.where(Order.customer_id == customer_id)
        return stmt

    @staticmethod
    async def list_page(
        db: AsyncSession,
        offset: int,
        limit: int,
        status: Optional[OrderStatus] = None,
        customer_id: Optional[str] = None,
    ) -> list[Order]:
        stmt = OrderRepository._filtered(select(Order), status, customer_id)
        result = await db.execute(
            stmt.order_by(Order.created_at.desc(), Order.id.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def count(
        db: AsyncSession,
        status: Optional[OrderStatus] = None,
        customer_id: Optional[str] = None,
    ) -> int:
        stmt = OrderRepository._filtered(select(func.count(Order.id)), status, customer_id)
        result = await db.execute(stmt)
        return result.scalar_one()

    @staticmethod
    async def delete(db: AsyncSession, order: Order) -> None:
        await db.delete(order)
        await db.commit()
