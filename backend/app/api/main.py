from fastapi import APIRouter

from app.api.routes import characters, reviews, tier_list

api_router = APIRouter()
api_router.include_router(characters.router)
api_router.include_router(reviews.router)
api_router.include_router(tier_list.router)
