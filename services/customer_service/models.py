
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from shared.config.database import Base, new_uuid, utcnow


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=new_uuid)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Not loaded implicitly; callers opt in with selectinload(Customer.orders)
    orders = relationship(
        "Order",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Order.created_at.desc()",
    )

    def __repr__(self):
        return f"<Customer(id={self.id}, email='{self.email}')>"
