from sqlalchemy import Column, String, JSON
from app.db.base import BaseModel

class Customer(BaseModel):
    __tablename__ = "customers"

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    # Live session tokens, newest first; mirrors the session store
    sessions = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Customer {self.email}>"
