"""Database models for the recipe planner."""

from .base import Base, TimestampMixin, UserOwnedMixin
from .user import User, Role
from .preferences import Preference
from .cart import Cart
from .pantry import Pantry
from .banned_word import BannedWord
from .admin_recipe import AdminRecipe
from .kroger_tokens import KrogerToken

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UserOwnedMixin",
    # Models
    "User",
    "Role",
    "Preference",
    "Cart",
    "Pantry",
    "BannedWord",
    "AdminRecipe",
    "KrogerToken",
]
