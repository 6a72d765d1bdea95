from novel_nest.api.http.health import router as health_router
from novel_nest.api.http.auth import router as auth_router
from novel_nest.api.http.users import router as users_router
from novel_nest.api.http.novels import router as novels_router
from novel_nest.api.http.episodes import router as episodes_router

__all__ = [
    "health_router",
    "auth_router", 
    "users_router",
    "novels_router",
    "episodes_router"
]
