from fastapi import APIRouter

from app.api.v1.endpoints.admin import router as admin_router
from app.api.v1.endpoints.health import router as health_router
from app.api.v1.endpoints.listings import router as listings_router
from app.api.v1.endpoints.payments import router as payments_router
from app.api.v1.endpoints.users import router as users_router


router = APIRouter(prefix="/api")
router.include_router(health_router, tags=["health"])
router.include_router(listings_router, tags=["listings"])
router.include_router(users_router, tags=["users"])
router.include_router(payments_router, tags=["payments"])
router.include_router(admin_router, tags=["admin"])
