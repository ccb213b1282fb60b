from __future__ import annotations

from pydantic import BaseModel
from typing import Optional, List

class CategoryBase(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[int] = None

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(CategoryBase):
    id: Optional[int] = None

class Category(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[int] = None

    class Config:
        from_attributes = True

class CategoryNode(Category):
    """Category with nested children; the key is left out for leaves"""
    children: Optional[List[CategoryNode]] = None

CategoryNode.model_rebuild()
