"""
Seed the database with the admin login and a few sample customers.

    python -m scripts.seed

Safe to run repeatedly: users and customers are matched by email and only
created when missing.
"""
import asyncio
import random

from termcolor import colored

from services.auth_service import models as auth_models  # noqa: F401
from services.auth_service.repository import UserRepository
from services.auth_service.schemas import LoginRequest
from services.auth_service.service import AuthService
from services.customer_service.repository import CustomerRepository
from services.customer_service.schemas import CustomerCreate
from services.customer_service.service import CustomerService
from services.order_service.models import OrderStatus
from services.order_service.schemas import OrderCreate
from services.order_service.service import OrderService
from shared.config.database import Database
from shared.config.settings import ADMIN_EMAIL, ADMIN_PASSWORD, DATABASE_URL
from shared.http.validation import validate_payload

SAMPLE_CUSTOMERS = [
    {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@example.com",
        "phone": "+1234567890",
        "address": "123 Main St, New York, NY 10001",
    },
    {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane.smith@example.com",
        "phone": "+1987654321",
        "address": "456 Oak Ave, Los Angeles, CA 90210",
    },
    {
        "firstName": "Bob",
        "lastName": "Johnson",
        "email": "bob.johnson@example.com",
        "phone": "+1555123456",
        "address": "789 Pine St, Chicago, IL 60601",
    },
]

SAMPLE_ITEMS = [
    {"productName": "Laptop Computer", "quantity": 1, "unitPrice": 999.99},
    {"productName": "Wireless Mouse", "quantity": 2, "unitPrice": 29.99},
]

SAMPLE_STATUSES = [s for s in OrderStatus if s is not OrderStatus.CANCELLED]


async def seed_admin(db):
    credentials = validate_payload(LoginRequest, {"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    if await UserRepository.get_by_email(db, credentials.email):
        print(colored(f"ℹ️  Admin user already exists: {credentials.email}", "cyan"))
        return

    await AuthService.create_user(db, credentials.email, credentials.password)
    print(colored(f"✅ Admin user created: {credentials.email}", "green"))


async def seed_customers(db):
    for raw in SAMPLE_CUSTOMERS:
        data = validate_payload(CustomerCreate, raw)

        if await CustomerRepository.get_by_email(db, data.email):
            print(colored(f"ℹ️  Customer already exists: {data.email}", "cyan"))
            continue

        customer = await CustomerService.create_customer(db, data)
        order_count = random.randint(1, 3)
        for _ in range(order_count):
            order = validate_payload(
                OrderCreate,
                {
                    "customerId": customer.id,
                    "status": random.choice(SAMPLE_STATUSES).value,
                    "notes": "Sample order created during seeding",
                    "items": SAMPLE_ITEMS,
                },
            )
            await OrderService.create_order(db, order)

        print(colored(
            f"✅ Customer created: {customer.first_name} {customer.last_name} with {order_count} orders",
            "green",
        ))


async def main():
    print(colored("🌱 Starting database seed...", "cyan"))
    database = Database(DATABASE_URL)
    try:
        await database.create_all()
        async with database.session() as db:
            await seed_admin(db)
            await seed_customers(db)
    finally:
        await database.dispose()
    print(colored("🎉 Database seeding completed!", "green"))


if __name__ == "__main__":
    asyncio.run(main())
