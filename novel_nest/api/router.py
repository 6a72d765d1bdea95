from fastapi import APIRouter
from novel_nest.api.http import auth_router, users_router, novels_router, episodes_router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(novels_router)
api_router.include_router(episodes_router)
