"""Account routes: signup, login, and profile."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import ConflictError, ForbiddenError, ValidationError
from ..models import Role, User
from ..schemas import LoginRequest, ProfileUpdateRequest, SignupRequest
from ..security import (
    TokenIdentity,
    get_current_user,
    get_optional_identity,
    hash_password,
    issue_token,
    verify_password,
)
from ..validation import validate_email, validate_name, validate_signup

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def issue_user_token(user: User) -> str:
    """Session token carrying the user's public profile claims."""
    return issue_token(
        user.id,
        user.role.value,
        extra_claims={
            "username": user.username,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "email": user.email,
        },
    )


def create_account(db: Session, payload: SignupRequest, role: Role) -> User:
    """Validate a signup body and insert the user.

    Raises:
        ValidationError: On invalid input or a taken username/email.
    """
    validate_signup(payload, admin=role == Role.ADMIN)

    if db.query(User).filter(User.username == payload.username).first():
        raise ValidationError("Username already exists")
    if db.query(User).filter(User.email == payload.email).first():
        raise ValidationError("Email already exists")

    user = User(
        username=payload.username,
        password_hash=hash_password(payload.password),
        email=payload.email,
        first_name=payload.firstName,
        last_name=payload.lastName,
        role=role,
    )
    db.add(user)
    db.flush()
    logger.info(f"Created {role.value} account: {user.username}")
    return user


@router.post("/signup")
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    """Create a regular account and return a session token."""
    user = create_account(db, payload, Role.USER)
    return {"message": "Sign up successful", "token": issue_user_token(user)}


@router.post("/adminSignup")
def admin_signup(
    payload: SignupRequest,
    identity: TokenIdentity | None = Depends(get_optional_identity),
    db: Session = Depends(get_db),
):
    """Create an admin account.

    The first admin can be created anonymously; after that only an admin
    can create another.
    """
    admin_exists = db.query(User).filter(User.role == Role.ADMIN).first() is not None
    if admin_exists and (identity is None or not identity.is_admin):
        raise ForbiddenError("Admin access required")

    user = create_account(db, payload, Role.ADMIN)
    return {"message": "Sign up successful", "token": issue_user_token(user)}


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Check credentials and issue a session token."""
    if not payload.username or not payload.password:
        raise ValidationError("Username and password are required")

    user = db.query(User).filter(User.username == payload.username).first()
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info(f"Failed login for username: {payload.username}")
        raise ValidationError("Invalid username or password")

    logger.info(f"Login successful: {user.username}")
    return {"message": "Login successful", "token": issue_user_token(user)}


@router.get("/profile")
def get_profile(user: User = Depends(get_current_user)):
    return {"user": user.to_dict()}


@router.put("/profile")
@router.put("/updateProfile")
def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update non-password profile fields of the calling user."""
    if payload.firstName is not None:
        validate_name("First name", payload.firstName)
        user.first_name = payload.firstName
    if payload.lastName is not None:
        validate_name("Last name", payload.lastName)
        user.last_name = payload.lastName
    if payload.email is not None and payload.email != user.email:
        validate_email(payload.email)
        taken = db.query(User).filter(User.email == payload.email, User.id != user.id).first()
        if taken:
            raise ConflictError("Email already exists")
        user.email = payload.email
    if payload.location is not None:
        if len(payload.location) > 200:
            raise ValidationError("Location must be under 200 characters")
        user.location = payload.location

    db.flush()
    logger.info(f"Updated profile for {user.username}")
    return {"user": user.to_dict()}
