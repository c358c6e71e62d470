from fastapi import APIRouter

from .endpoints.candidates import router as candidates_router
from .endpoints.health import router as health_router
from .endpoints.interactions import router as interactions_router
from .endpoints.matches import router as matches_router
from .endpoints.preferences import router as preferences_router
from .endpoints.profiles import router as profiles_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "Roomi matching API is running"}


api_router.include_router(health_router)
api_router.include_router(candidates_router)
api_router.include_router(interactions_router)
api_router.include_router(matches_router)
api_router.include_router(profiles_router)
api_router.include_router(preferences_router)
