from blognote.web.routers.auth import router as auth_router
from blognote.web.routers.posts import router as posts_router
from blognote.web.routers.users import router as users_router

__all__ = [
    "auth_router",
    "posts_router",
    "users_router",
]
