"""
Storefront Seed Data (async, idempotent)
- Category hierarchy, a few products and a demo customer
Run:  python scripts/seed/catalog_data.py
"""

import os, sys
import asyncio
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from decimal import Decimal
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.database import async_session_maker, engine
from app.core.security import CredentialVerifier
from app.models.base import Base
from app.models.catalog.category import Category
from app.models.catalog.product import Product
from app.models.customer.customer import Customer

# ----------------------------------------------------------------------
# SEED DATA
# ----------------------------------------------------------------------

# (name, parent name)
CATEGORIES_SEED = [
    ("Shoes", None),
    ("Running", "Shoes"),
    ("Trail", "Running"),
    ("Sneakers", "Shoes"),
    ("Shirts", None),
]

PRODUCTS_SEED = [
    {"name": "Nike Airmax", "description": "Size 43", "category": "Running",
     "price": Decimal("120.00"), "stock": 50},
    {"name": "Speedcross", "description": "Size 42", "category": "Trail",
     "price": Decimal("135.00"), "stock": 12},
    {"name": "Linen shirt", "description": "Size M", "category": "Shirts",
     "price": Decimal("39.90"), "stock": 24},
]

DEMO_CUSTOMER = {"email": "john@email.com", "password": "123456"}

# ----------------------------------------------------------------------
# ASYNC HELPERS (idempotent upserts)
# ----------------------------------------------------------------------

async def get_or_create_category(db: AsyncSession, name: str, parent: Optional[Category]) -> Category:
    result = await db.execute(select(Category).where(Category.name == name))
    obj = result.scalar_one_or_none()
    if obj:
        return obj
    obj = Category(name=name, parent_id=parent.id if parent else None)
    db.add(obj)
    await db.flush()
    return obj

async def get_or_create_product(db: AsyncSession, data: dict, category: Category) -> Product:
    result = await db.execute(select(Product).where(Product.name == data["name"]))
    obj = result.scalar_one_or_none()
    if obj:
        return obj
    fields = {k: v for k, v in data.items() if k != "category"}
    obj = Product(**fields, category_id=category.id)
    db.add(obj)
    await db.flush()
    return obj

# ----------------------------------------------------------------------
# MAIN ASYNC SEED LOGIC
# ----------------------------------------------------------------------

async def seed(db: AsyncSession):
    # 1) Category tree, parents before children
    categories = {}
    for name, parent_name in CATEGORIES_SEED:
        categories[name] = await get_or_create_category(db, name, categories.get(parent_name))
    print(f"✓ Categories ready: {len(categories)}")

    # 2) Products
    for data in PRODUCTS_SEED:
        await get_or_create_product(db, data, categories[data["category"]])
    print(f"✓ Products ready: {len(PRODUCTS_SEED)}")

    # 3) Demo customer
    result = await db.execute(select(Customer).where(Customer.email == DEMO_CUSTOMER["email"]))
    if not result.scalar_one_or_none():
        verifier = CredentialVerifier(rounds=settings.BCRYPT_ROUNDS)
        db.add(Customer(
            email=DEMO_CUSTOMER["email"],
            hashed_password=verifier.hash(DEMO_CUSTOMER["password"]),
            sessions=[],
        ))
    print(f"✓ Demo customer ready: {DEMO_CUSTOMER['email']}")

    await db.commit()

# ----------------------------------------------------------------------
# ASYNC ENTRY POINT
# ----------------------------------------------------------------------

async def main():
    # Create tables (safe if already created)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as db:
        try:
            await seed(db)
            print("✅ Storefront seed completed successfully!")
        except Exception as ex:
            await db.rollback()
            print(f"❌ Seed failed: {ex}")
            raise

if __name__ == "__main__":
    asyncio.run(main())
