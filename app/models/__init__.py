from app.models.customer.customer import Customer
from app.models.catalog.category import Category
from app.models.catalog.product import Product


__all__ = [
    "Customer",
    "Category",
    "Product",
]
