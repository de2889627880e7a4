"""Preferences model for storing user dietary preferences."""

from sqlalchemy import Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UserOwnedMixin


class Preference(Base, TimestampMixin, UserOwnedMixin):
    """One row per user, created lazily on the first preference write.

    The four vocabulary lists are replaced whole on every write;
    favorite_recipes behaves like a set of Spoonacular recipe ids.
    """

    __tablename__ = "preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cuisine_like: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    cuisine_dislike: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    diet: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    intolerances: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    favorite_recipes: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    def to_dict(self) -> dict:
        return {
            "cuisineLike": self.cuisine_like or [],
            "cuisineDislike": self.cuisine_dislike or [],
            "diet": self.diet or [],
            "intolerances": self.intolerances or [],
            "favoriteRecipes": self.favorite_recipes or [],
        }

    def __repr__(self) -> str:
        return f"<Preference(id={self.id}, user_id={self.user_id})>"
