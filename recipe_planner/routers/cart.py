"""Shopping cart routes and Kroger price checks."""

import logging
import uuid

import requests
from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from .. import kroger_service
from ..database import get_db
from ..errors import AuthError, NotFoundError, ValidationError
from ..models import Cart, User
from ..schemas import CartItemRequest, ItemIdRequest, PriceCheckRequest
from ..security import TokenIdentity, get_current_identity, get_current_user
from ..user_documents import append_item, clear_items, find_user_document, remove_item

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["cart"])


@router.get("/shoppingCart")
def get_cart(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> list[dict]:
    """Cart items in insertion order; empty if no cart exists yet."""
    cart = find_user_document(db, Cart, identity.id)
    return list(cart.items or []) if cart else []


@router.post("/shoppingCart")
def add_cart_item(
    payload: CartItemRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Append an item to the cart (duplicates allowed)."""
    if not payload.name:
        raise ValidationError("Missing itemName")

    item = {
        "id": payload.id if payload.id is not None else uuid.uuid4().hex,
        "name": payload.name.strip(),
        "quantity": payload.quantity,
        "origin": payload.origin,
    }
    append_item(db, Cart, user.id, item)
    return {"message": "Cart saved successfully", "item": item}


@router.delete("/shoppingCart")
def remove_cart_item(
    payload: ItemIdRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if payload.itemId is None:
        raise ValidationError("Missing item ID")
    items = remove_item(db, Cart, user.id, payload.itemId)
    return {"message": "Item removed", "items": items}


# =============================================================================
# Kroger pricing
# =============================================================================


def resolve_kroger_token(db: Session, user_id: int, header_token: str | None) -> str:
    """Pick the credential for Kroger product search.

    Order: an explicit X-Kroger-Token header, the user's stored OAuth token,
    then an app-level client credentials token.

    Raises:
        AuthError: If none is available.
    """
    if header_token:
        return header_token

    user_token = kroger_service.get_user_token(db, user_id)
    if user_token:
        return user_token

    if kroger_service.is_configured():
        try:
            return kroger_service.get_client_credentials_token()
        except (requests.RequestException, KeyError) as e:
            logger.error(f"Kroger client credentials request failed: {e}")

    raise AuthError("User not authenticated with Kroger")


@router.post("/krogerCart/prices")
@router.get("/krogerCart/prices")
def price_cart(
    payload: PriceCheckRequest | None = None,
    zipcode: str | None = None,
    x_kroger_token: str | None = Header(default=None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Price every cart item at the Kroger store nearest to a zip code.

    Items Kroger does not recognize land in ``not_found`` and are excluded
    from ``total_cost``.
    """
    zipcode = (payload.zipcode if payload else None) or zipcode
    if not zipcode:
        raise ValidationError("Missing zip code")

    cart = find_user_document(db, Cart, user.id)
    if cart is None or not cart.items:
        raise NotFoundError("Cart is empty")

    token = resolve_kroger_token(db, user.id, x_kroger_token)

    location_id = kroger_service.find_nearest_store(zipcode, token)
    if not location_id:
        raise NotFoundError("No Kroger store found nearby")

    names = [item.get("name", "") for item in cart.items]
    report = kroger_service.price_items(names, location_id, token)
    return report.to_dict()


@router.post("/krogerCart/clear")
def clear_cart(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    clear_items(db, Cart, user.id)
    return {"message": "Cart successfully cleared"}
