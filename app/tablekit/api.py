from fastapi import APIRouter

from app.tablekit.routers.customers import router as customers_router
from app.tablekit.routers.health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(customers_router, prefix="/api", tags=["customers"])
