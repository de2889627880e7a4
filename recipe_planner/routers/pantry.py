"""Pantry routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import spoonacular_service
from ..database import get_db
from ..errors import ValidationError
from ..models import Pantry, User
from ..schemas import ExpirationUpdateRequest, ItemIdRequest, PantryAddRequest
from ..security import TokenIdentity, get_current_identity, get_current_user
from ..user_documents import append_item, find_user_document, remove_item, update_item

router = APIRouter(prefix="/api/pantry", tags=["pantry"])


@router.get("")
def get_pantry(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> list[dict]:
    pantry = find_user_document(db, Pantry, identity.id)
    return list(pantry.items or []) if pantry else []


@router.get("/ingredients")
def search_pantry_ingredients(
    query: str,
    identity: TokenIdentity = Depends(get_current_identity),
) -> list[dict]:
    """Ingredient suggestions for adding to the pantry."""
    if not query.strip():
        return []
    return spoonacular_service.search_ingredients(query.strip())


@router.post("")
def add_pantry_item(
    payload: PantryAddRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Add an item; an item whose id is already in the pantry is rejected."""
    if payload.item is None:
        raise ValidationError("Missing user or item")

    item = payload.item.model_dump(mode="json")
    append_item(db, Pantry, user.id, item, unique_id=True, duplicate_message="Item already in pantry")
    return {"message": "Item added", "item": item}


@router.delete("")
def remove_pantry_item(
    payload: ItemIdRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if payload.itemId is None:
        raise ValidationError("Missing user or item ID")
    items = remove_item(db, Pantry, user.id, payload.itemId)
    return {"message": "Item removed", "items": items}


@router.put("/expiration")
def update_expiration(
    payload: ExpirationUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if payload.itemId is None or payload.expirationDate is None:
        raise ValidationError("Missing item ID or expiration date")
    items = update_item(
        db,
        Pantry,
        user.id,
        payload.itemId,
        expirationDate=payload.expirationDate.isoformat(),
    )
    return {"message": "Expiration date updated", "items": items}
