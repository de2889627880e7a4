"""Banned-word matching over user profile fields."""

from dataclasses import dataclass, field
from typing import Iterable

from .models import User

# Profile fields checked, in reporting order: (attribute, label)
MODERATED_FIELDS = (
    ("username", "username"),
    ("first_name", "firstName"),
    ("last_name", "lastName"),
)


@dataclass
class Violation:
    """A user whose profile contains at least one banned word."""

    username: str
    first_name: str | None
    last_name: str | None
    matched_fields: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "matchedFields": self.matched_fields,
        }


def find_violations(users: Iterable[User], banned_words: Iterable[str]) -> list[Violation]:
    """Flag users whose username or names contain a banned word.

    Matching is a case-insensitive substring test, not a whole-word match:
    "badword" flags "BadWordGuy". Each (word, field) hit adds one
    "<field>: <value>" entry.
    """
    words = [w.lower() for w in banned_words if w]
    flagged = []

    for user in users:
        matches = []
        for banned in words:
            for attr, label in MODERATED_FIELDS:
                value = getattr(user, attr)
                if value and banned in value.lower():
                    matches.append(f"{label}: {value}")

        if matches:
            flagged.append(
                Violation(
                    username=user.username,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    matched_fields=matches,
                )
            )

    return flagged
