"""Kroger OAuth credentials, one row per connected user."""

import time

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UserOwnedMixin


class KrogerToken(Base, TimestampMixin, UserOwnedMixin):
    """Access/refresh token pair from the authorization-code flow.

    ``token_expiry`` is a Unix timestamp, already shortened by a small
    margin when the row is written.
    """

    __tablename__ = "kroger_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    access_token: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    refresh_token: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    token_expiry: Mapped[float | None] = mapped_column(Float, nullable=True)

    def is_expired(self, now: float | None = None) -> bool:
        if now is None:
            now = time.time()
        return now >= (self.token_expiry or 0)

    def __repr__(self) -> str:
        return f"<KrogerToken(user_id={self.user_id}, expiry={self.token_expiry})>"
