"""Password hashing, token issuing/verification, and auth dependencies.

Tokens are HS256 JWTs carrying at least the user ``id`` and ``role``. There
is no revocation list: a token stays valid until it expires.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db
from .errors import AuthError, ForbiddenError, NotFoundError
from .models import Role, User

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
STATE_TOKEN_PURPOSE = "kroger_oauth"
STATE_TOKEN_TTL = timedelta(minutes=10)


class InvalidTokenError(Exception):
    """Raised when a token cannot be parsed, verified, or is expired."""

    pass


@dataclass
class TokenIdentity:
    """Identity recovered from a verified token."""

    id: int
    role: str
    claims: dict = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


# =============================================================================
# Passwords
# =============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


# =============================================================================
# Tokens
# =============================================================================


def issue_token(
    user_id: int,
    role: str,
    extra_claims: dict | None = None,
    ttl: timedelta | None = None,
) -> str:
    """Create a signed, time-limited token for a user.

    Args:
        user_id: Primary key of the user.
        role: "user" or "admin".
        extra_claims: Additional payload entries (e.g. username).
        ttl: Lifetime; defaults to the configured expiry in hours.

    Returns:
        The encoded token.
    """
    settings = get_settings()
    if ttl is None:
        ttl = timedelta(hours=settings.jwt_expiry_hours)

    now = datetime.now(timezone.utc)
    payload = dict(extra_claims or {})
    payload.update({"id": user_id, "role": role, "iat": now, "exp": now + ttl})
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> TokenIdentity:
    """Decode a token and check its signature and expiry.

    Raises:
        InvalidTokenError: If verification fails or the payload has no id.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise InvalidTokenError(str(e)) from e

    if claims.get("id") is None:
        raise InvalidTokenError("Token payload has no id")
    return TokenIdentity(
        id=claims["id"],
        role=claims.get("role", Role.USER.value),
        claims=claims,
    )


def parse_bearer(authorization: str | None) -> str:
    """Extract the token from a ``Bearer <token>`` header value."""
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError("Missing or malformed Authorization header")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise InvalidTokenError("Empty bearer token")
    return token


def issue_state_token(user_id: int) -> str:
    """Token passed through the Kroger OAuth redirect as ``state``."""
    return issue_token(
        user_id,
        Role.USER.value,
        extra_claims={"purpose": STATE_TOKEN_PURPOSE},
        ttl=STATE_TOKEN_TTL,
    )


def verify_state_token(state: str) -> int:
    """Return the user id named in an OAuth ``state`` token."""
    identity = verify_token(state)
    if identity.claims.get("purpose") != STATE_TOKEN_PURPOSE:
        raise InvalidTokenError("Token is not an OAuth state token")
    return identity.id


# =============================================================================
# FastAPI dependencies
# =============================================================================


def get_current_identity(authorization: str | None = Header(default=None)) -> TokenIdentity:
    """Resolve the caller from the Authorization header or fail with 401."""
    try:
        identity = verify_token(parse_bearer(authorization))
        if "purpose" in identity.claims:
            raise InvalidTokenError("Purpose-bound token used as a session token")
        return identity
    except InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e}")
        raise AuthError("Unauthorized: Invalid token.")


def get_optional_identity(authorization: str | None = Header(default=None)) -> TokenIdentity | None:
    """Like get_current_identity, but anonymous callers resolve to None."""
    if authorization is None:
        return None
    return get_current_identity(authorization)


def require_admin(authorization: str | None = Header(default=None)) -> TokenIdentity:
    """Resolve the caller and require the admin role."""
    identity = get_current_identity(authorization)
    if not identity.is_admin:
        raise ForbiddenError("Admin access required")
    return identity


def get_current_user(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    """Load the caller's User row; 404 if the account no longer exists."""
    user = db.get(User, identity.id)
    if user is None:
        raise NotFoundError("User not found.")
    return user
