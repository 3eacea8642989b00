from fastapi import APIRouter

from .endpoints.admin import router as admin_router
from .endpoints.for_you import router as for_you_router
from .endpoints.health import router as health_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "For You API is running"}


api_router.include_router(health_router)
api_router.include_router(admin_router)
api_router.include_router(for_you_router)
