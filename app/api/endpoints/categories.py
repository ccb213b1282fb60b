from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from app.core.database import get_async_session
from app.core.exceptions import NotFoundError
from app.services.catalog.category_service import CategoryService
from app.schemas.catalog.category import Category, CategoryCreate, CategoryNode, CategoryUpdate

router = APIRouter()

@router.get("", response_model=List[CategoryNode], response_model_exclude_unset=True)
async def get_categories(
    db: AsyncSession = Depends(get_async_session)
):
    """Get all categories nested under their parents"""
    service = CategoryService(db)
    return await service.get_category_tree()

@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session)
):
    """Get category by ID"""
    service = CategoryService(db)
    category = await service.get_category_by_id(category_id)
    if not category:
        raise NotFoundError("Category not found")
    return category

@router.post("", response_model=Category)
async def create_category(
    category_data: CategoryCreate,
    db: AsyncSession = Depends(get_async_session)
):
    """Create a category; parent_id null makes it a top-level category"""
    service = CategoryService(db)
    return await service.create_category(category_data)

@router.put("", response_model=Category)
async def update_category(
    category_data: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session)
):
    """Update category"""
    service = CategoryService(db)
    return await service.update_category(category_data)
