"""Banned words used to moderate user profile fields."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class BannedWord(Base, TimestampMixin):
    """A lowercase word that must not appear in usernames or names."""

    __tablename__ = "banned_words"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    word: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    added_by: Mapped[str | None] = mapped_column(String(20), nullable=True)

    def to_dict(self) -> dict:
        return {"word": self.word, "addedBy": self.added_by}

    def __repr__(self) -> str:
        return f"<BannedWord(word='{self.word}')>"
