from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.catalog.category import Category
from app.schemas.catalog.category import Category as CategorySchema, CategoryCreate, CategoryUpdate
from app.core.exceptions import NotFoundError, ValidationError, missing_required
from app.services.catalog.category_tree import build_category_tree

class CategoryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_categories(self) -> List[Category]:
        """All categories in creation order"""
        result = await self.db.execute(select(Category).order_by(Category.id))
        return result.scalars().all()

    async def get_category_tree(self) -> List[Dict[str, Any]]:
        """Categories nested under their parents"""
        categories = await self.get_categories()
        rows = [CategorySchema.model_validate(c).model_dump() for c in categories]
        return build_category_tree(rows)

    async def get_category_by_id(self, category_id: int) -> Optional[Category]:
        result = await self.db.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def create_category(self, category_data: CategoryCreate) -> Category:
        missing_required(name=category_data.name)

        # Check if parent exists if provided
        if category_data.parent_id is not None:
            parent = await self.get_category_by_id(category_data.parent_id)
            if not parent:
                raise ValidationError("Parent category not found")

        category = Category(**category_data.model_dump())

        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def update_category(self, category_data: CategoryUpdate) -> Category:
        missing_required(id=category_data.id)

        category = await self.get_category_by_id(category_data.id)
        if not category:
            raise NotFoundError("Category not found")

        changes = category_data.model_dump(exclude_unset=True, exclude={"id"})

        # Check parent validity if being updated
        parent_id = changes.get("parent_id")
        if parent_id is not None and parent_id != category.parent_id:
            if parent_id == category.id:
                raise ValidationError("Category cannot be its own parent")

            parent = await self.get_category_by_id(parent_id)
            if not parent:
                raise ValidationError("Parent category not found")

            if await self._is_descendant(parent, category.id):
                raise ValidationError("Category cannot be moved under its own descendant")

        if "name" in changes:
            missing_required(name=changes["name"])

        for field, value in changes.items():
            setattr(category, field, value)

        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def _is_descendant(self, category: Category, ancestor_id: int) -> bool:
        """Walk up from category; True if ancestor_id is on its parent chain"""
        seen = set()
        current = category
        while current is not None and current.parent_id is not None:
            if current.parent_id == ancestor_id:
                return True
            if current.parent_id in seen:
                return False
            seen.add(current.parent_id)
            current = await self.get_category_by_id(current.parent_id)
        return False
