"""Cart model for a user's shopping cart."""

from sqlalchemy import Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UserOwnedMixin


class Cart(Base, TimestampMixin, UserOwnedMixin):
    """Model for storing a user's shopping cart.

    Items are appended in order with no duplicate check.

    Item structure (JSON):
    {
        "id": "3f2a9c...",
        "name": "Milk",
        "quantity": 1,
        "origin": "recipe:715538"
    }
    """

    __tablename__ = "carts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    items: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        item_count = len(self.items) if self.items else 0
        return f"<Cart(id={self.id}, user_id={self.user_id}, items={item_count})>"
