from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base import BaseModel

class Category(BaseModel):
    __tablename__ = 'categories'
    
    name = Column(String(100), nullable=False)
    description = Column(Text)
    image = Column(String(500))
    parent_id = Column(Integer, ForeignKey('categories.id'), nullable=True, index=True)

    products = relationship("Product", back_populates="category")
