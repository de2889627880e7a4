"""Kroger OAuth redirect flow.

The signed ``state`` parameter ties the callback to the user who started the
flow, so the resulting token is stored against that user.
"""

import logging

import requests
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from .. import kroger_service
from ..config import get_settings
from ..database import get_db
from ..errors import AuthError, InternalError, NotFoundError, ServiceUnavailableError, ValidationError
from ..models import User
from ..security import (
    InvalidTokenError,
    TokenIdentity,
    get_current_identity,
    issue_state_token,
    verify_state_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["kroger"])


@router.get("/krogerLogin")
def kroger_login(identity: TokenIdentity = Depends(get_current_identity)):
    """Redirect the caller to Kroger's authorization page."""
    if not kroger_service.is_configured():
        raise ServiceUnavailableError("Kroger integration is not configured")
    return RedirectResponse(kroger_service.get_auth_url(issue_state_token(identity.id)))


@router.get("/krogerCallback")
def kroger_callback(
    code: str | None = None,
    state: str | None = None,
    db: Session = Depends(get_db),
):
    """Exchange the authorization code and store the token for the user."""
    if not code or not state:
        raise ValidationError("Missing code or state")

    try:
        user_id = verify_state_token(state)
    except InvalidTokenError as e:
        logger.warning(f"Kroger callback with invalid state: {e}")
        raise AuthError("Invalid state")

    if db.get(User, user_id) is None:
        raise NotFoundError("User not found")

    try:
        token_data = kroger_service.exchange_auth_code(code)
        kroger_service.save_user_token(db, user_id, token_data)
    except (requests.RequestException, KeyError) as e:
        logger.error(f"Kroger token exchange failed: {e}")
        raise InternalError("Token exchange failed")

    return RedirectResponse(get_settings().kroger_success_redirect)
