"""Recipe model for admin-curated recipes."""

from sqlalchemy import Integer, String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class AdminRecipe(Base, TimestampMixin):
    """Model for recipes created by admins.

    Cuisines and diets are attached in follow-up calls that address the
    recipe by id.
    """

    __tablename__ = "admin_recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    ready_in_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    ingredients: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    diets: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    cuisines: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "readyInMinutes": self.ready_in_minutes,
            "instructions": self.instructions,
            "ingredients": self.ingredients or [],
            "diets": self.diets or [],
            "cuisines": self.cuisines or [],
        }

    def __repr__(self) -> str:
        return f"<AdminRecipe(id={self.id}, title='{self.title}')>"
