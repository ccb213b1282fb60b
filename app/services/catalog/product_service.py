from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.catalog.category import Category
from app.models.catalog.product import Product
from app.schemas.catalog.product_schema import ProductCreate, ProductUpdate
from app.core.exceptions import NotFoundError, ValidationError, missing_required

class ProductService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ensure_category(self, category_id: int):
        category = await self.db.execute(
            select(Category).where(Category.id == category_id)
        )
        if not category.scalar_one_or_none():
            raise ValidationError("Category not found")

    async def get_products(self) -> List[Product]:
        result = await self.db.execute(select(Product).order_by(Product.id))
        return result.scalars().all()

    async def get_products_by_category(self, category_id: int) -> List[Product]:
        result = await self.db.execute(
            select(Product)
            .where(Product.category_id == category_id)
            .order_by(Product.id)
        )
        return result.scalars().all()

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        result = await self.db.execute(
            select(Product).where(Product.id == product_id)
        )
        return result.scalar_one_or_none()

    async def create_product(self, product_data: ProductCreate) -> Product:
        missing_required(
            name=product_data.name,
            description=product_data.description,
            category_id=product_data.category_id,
            price=product_data.price,
            stock=product_data.stock,
        )
        await self._ensure_category(product_data.category_id)

        product = Product(**product_data.model_dump())

        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)
        return product

    async def update_product(self, product_data: ProductUpdate) -> Product:
        """Update the fields present in the request body"""
        missing_required(id=product_data.id)

        product = await self.get_product_by_id(product_data.id)
        if not product:
            raise NotFoundError("Product not found")

        changes = product_data.model_dump(exclude_unset=True, exclude={"id"})
        cleared = [f for f in ("name", "price", "stock") if f in changes and changes[f] is None]
        if cleared:
            raise ValidationError.missing(cleared)
        if changes.get("category_id") is not None:
            await self._ensure_category(changes["category_id"])

        for field, value in changes.items():
            setattr(product, field, value)

        await self.db.commit()
        await self.db.refresh(product)
        return product
