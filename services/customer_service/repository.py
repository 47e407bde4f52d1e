from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from services.order_service.models import Order

from .models import Customer


class CustomerRepository:

    @staticmethod
    async def create(db: AsyncSession, customer: Customer) -> Customer:
        db.add(customer)
        await db.commit()
        await db.refresh(customer)
        return customer

    @staticmethod
    async def get_by_id(db: AsyncSession, customer_id: str) -> Optional[Customer]:
        result = await db.execute(select(Customer).where(Customer.id == customer_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[Customer]:
        result = await db.execute(select(Customer).where(Customer.email == email))
        return result.scalars().first()

    @staticmethod
    async def get_with_orders(db: AsyncSession, customer_id: str) -> Optional[Customer]:
        # Order.items is selectin-loaded by the mapper, so each order arrives with its items
        result = await db.execute(
            select(Customer)
            .where(Customer.id == customer_id)
            .options(selectinload(Customer.orders))
        )
        return result.scalars().first()

    @staticmethod
    async def list_page(db: AsyncSession, offset: int, limit: int) -> list[tuple[Customer, int]]:
        order_count = (
            select(func.count(Order.id))
            .where(Order.customer_id == Customer.id)
            .correlate(Customer)
            .scalar_subquery()
        )
        result = await db.execute(
            select(Customer, order_count.label("order_count"))
            .order_by(Customer.created_at.desc(), Customer.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [(row[0], row[1]) for row in result.all()]

    @staticmethod
    async def count(db: AsyncSession) -> int:
        result = await db.execute(select(func.count(Customer.id)))
        return result.scalar_one()

    @staticmethod
    async def update(db: AsyncSession, customer: Customer) -> Customer:
        db.add(customer)
        await db.commit()
        await db.refresh(customer)
        return customer

    @staticmethod
    async def delete(db: AsyncSession, customer: Customer) -> None:
        await db.delete(customer)
        await db.commit()
