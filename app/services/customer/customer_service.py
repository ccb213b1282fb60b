from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.customer.customer import Customer

class CustomerService:
    """Persistence for customer records"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_customer(self, customer_id: int) -> Optional[Customer]:
        result = await self.db.execute(
            select(Customer).where(Customer.id == customer_id)
        )
        return result.scalar_one_or_none()

    async def get_customer_by_email(self, email: str) -> Optional[Customer]:
        result = await self.db.execute(
            select(Customer).where(Customer.email == email)
        )
        return result.scalar_one_or_none()

    async def create_customer(self, email: str, hashed_password: str) -> Customer:
        customer = Customer(email=email, hashed_password=hashed_password, sessions=[])
        self.db.add(customer)
        await self.db.commit()
        await self.db.refresh(customer)
        return customer

    async def update_sessions(self, customer: Customer, sessions: List[str]) -> Customer:
        # Assign a new list so the JSON column is flagged dirty
        customer.sessions = list(sessions)
        await self.db.commit()
        await self.db.refresh(customer)
        return customer
