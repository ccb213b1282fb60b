from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import BaseModel

class Product(BaseModel):
    __tablename__ = 'products'
    
    name = Column(String(1000), nullable=False)
    description = Column(Text)
    category_id = Column(Integer, ForeignKey('categories.id'), index=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    image = Column(String(500))

    # Relationships
    category = relationship("Category", back_populates="products")
