from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from app.core.database import get_async_session
from app.core.exceptions import NotFoundError
from app.services.catalog.product_service import ProductService
from app.schemas.catalog.product_schema import Product, ProductCreate, ProductUpdate

router = APIRouter()

@router.get("", response_model=List[Product])
async def get_products(
    db: AsyncSession = Depends(get_async_session)
):
    service = ProductService(db)
    return await service.get_products()

@router.get("/category/{category_id}", response_model=List[Product])
async def get_products_by_category(
    category_id: int,
    db: AsyncSession = Depends(get_async_session)
):
    """Products filed under one category"""
    service = ProductService(db)
    return await service.get_products_by_category(category_id)

@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_async_session)
):
    service = ProductService(db)
    product = await service.get_product_by_id(product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product

@router.post("", response_model=Product)
async def create_product(
    product_data: ProductCreate,
    db: AsyncSession = Depends(get_async_session)
):
    service = ProductService(db)
    return await service.create_product(product_data)

@router.put("", response_model=Product)
async def update_product(
    product_data: ProductUpdate,
    db: AsyncSession = Depends(get_async_session)
):
    """Update a product; id is taken from the body"""
    service = ProductService(db)
    return await service.update_product(product_data)
