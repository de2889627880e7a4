"""Pantry model for tracking pantry items."""

from sqlalchemy import Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UserOwnedMixin


class Pantry(Base, TimestampMixin, UserOwnedMixin):
    """Model for tracking the items in a user's pantry.

    Item ids are supplied by the client (Spoonacular ingredient ids) and are
    unique within one pantry.

    Item structure (JSON):
    {
        "id": 9003,
        "name": "apple",
        "quantity": 2,
        "origin": "spoonacular",
        "image": "apple.jpg",
        "expirationDate": "2026-01-20"
    }
    """

    __tablename__ = "pantries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    items: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        item_count = len(self.items) if self.items else 0
        return f"<Pantry(id={self.id}, user_id={self.user_id}, items={item_count})>"
