# api/v1/router.py
from fastapi import APIRouter

from . import meals, quick_add, clock

api_router = APIRouter()

api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
api_router.include_router(quick_add.router, prefix="/quick-add", tags=["Quick add"])
api_router.include_router(clock.router, prefix="/clock", tags=["Clock"])
