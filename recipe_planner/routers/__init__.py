"""HTTP route modules."""

from .admin import router as admin_router
from .auth import router as auth_router
from .cart import router as cart_router
from .kroger_auth import router as kroger_auth_router
from .pantry import router as pantry_router
from .preferences import router as preferences_router
from .recipes import router as recipes_router

ALL_ROUTERS = [
    auth_router,
    kroger_auth_router,
    preferences_router,
    cart_router,
    pantry_router,
    recipes_router,
    admin_router,
]

__all__ = ["ALL_ROUTERS"]
