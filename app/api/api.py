from fastapi import APIRouter
from app.api.endpoints import categories, customers, products

api_router = APIRouter()

api_router.include_router(customers.router, prefix="/customers", tags=["Customers"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(products.router, prefix="/products", tags=["Products"])
