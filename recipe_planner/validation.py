"""Input validation for account and preference payloads."""

import re

from .errors import ValidationError
from .schemas import SignupRequest

USERNAME_MIN, USERNAME_MAX = 3, 20
NAME_MIN, NAME_MAX = 2, 50
EMAIL_MAX = 50
USER_PASSWORD_MIN = 5
ADMIN_PASSWORD_MIN = 8

NAME_RE = re.compile(r"^[A-Za-z]+$")
EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
ADMIN_PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^a-zA-Z0-9]).{8,}$")
BAN_WORD_RE = re.compile(r"^[A-Za-z]+$")


def validate_username(username: str) -> None:
    if not USERNAME_MIN <= len(username) <= USERNAME_MAX:
        raise ValidationError(
            f"Username must be between {USERNAME_MIN} and {USERNAME_MAX} characters"
        )


def validate_name(label: str, value: str) -> None:
    """Validate a first or last name: 2-50 letters."""
    if not NAME_MIN <= len(value) <= NAME_MAX:
        raise ValidationError(f"{label} must be between {NAME_MIN} and {NAME_MAX} characters")
    if not NAME_RE.match(value):
        raise ValidationError(f"{label} must contain only alphabets")


def validate_email(email: str) -> None:
    if len(email) > EMAIL_MAX:
        raise ValidationError(f"Email must be under {EMAIL_MAX} characters")
    if not EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")


def validate_signup(payload: SignupRequest, admin: bool = False) -> None:
    """Validate a signup body.

    Admin accounts need a longer password with lowercase, uppercase, digit,
    and special characters.

    Raises:
        ValidationError: With the first failing rule's message.
    """
    if not all([payload.firstName, payload.lastName, payload.username, payload.password, payload.email]):
        raise ValidationError("All fields are required")

    validate_username(payload.username)

    min_password = ADMIN_PASSWORD_MIN if admin else USER_PASSWORD_MIN
    if len(payload.password) < min_password:
        raise ValidationError(f"Password must be at least {min_password} characters long")

    validate_name("First name", payload.firstName)
    validate_name("Last name", payload.lastName)
    validate_email(payload.email)

    if admin and not ADMIN_PASSWORD_RE.match(payload.password):
        raise ValidationError(
            "Password must contain at least: 1 lowercase letter, 1 uppercase letter, "
            "1 number, and 1 special character"
        )


def validate_vocabulary(label: str, values, allowed: tuple[str, ...]) -> list[str]:
    """Check that values is a list drawn from a fixed vocabulary.

    Returns:
        The values as a list, in the order given.
    """
    if values is None:
        raise ValidationError(f"Missing {label}")
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ValidationError(f"{label} must be an array of strings")

    unknown = [v for v in values if v not in allowed]
    if unknown:
        raise ValidationError(f"Unknown {label} value(s): {', '.join(unknown)}")
    return list(values)


def validate_ban_word(word: str | None) -> str:
    """Return the normalized (lowercase) banned word."""
    if not word:
        raise ValidationError("Missing word")
    if not BAN_WORD_RE.match(word):
        raise ValidationError("Ban word must contain only alphabets")
    return word.lower()
