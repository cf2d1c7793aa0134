from fastapi import APIRouter

from app.api.routes import career, game_saves

api_router = APIRouter()
api_router.include_router(game_saves.router)
api_router.include_router(career.router)
