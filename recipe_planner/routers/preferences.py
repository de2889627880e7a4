"""Preference routes: cuisine likes/dislikes, diets, intolerances, favorites.

Identity always comes from the bearer token; request bodies only carry the
new values.
"""

import logging

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from .. import spoonacular_service
from ..constants import PREFERENCE_FIELDS
from ..database import get_db
from ..errors import ValidationError
from ..models import Preference, User
from ..schemas import FavoriteRecipeRequest
from ..security import TokenIdentity, get_current_identity, get_current_user
from ..user_documents import add_to_set, find_user_document, remove_value, replace_field
from ..validation import validate_vocabulary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["preferences"])

# Route path -> (wire field name, success label)
PREFERENCE_ROUTES = {
    "/cuisineLike": ("cuisineLike", "Cuisine Like"),
    "/cuisineDislike": ("cuisineDislike", "Cuisine Dislike"),
    "/diet": ("diet", "Diet"),
    "/intolerance": ("intolerances", "Intolerance"),
}


def _favorites(db: Session, user_id: int) -> list[int]:
    prefs = find_user_document(db, Preference, user_id)
    return list(prefs.favorite_recipes or []) if prefs else []


@router.get("/preferences")
def get_preferences(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """All preference arrays; empty defaults if none were ever saved."""
    prefs = find_user_document(db, Preference, identity.id)
    if prefs is None:
        return {**{wire_name: [] for wire_name in PREFERENCE_FIELDS}, "favoriteRecipes": []}
    return prefs.to_dict()


def _register_preference_field(path: str, wire_name: str, label: str) -> None:
    """Add GET (read) and POST (replace whole array) routes for one field."""
    column, allowed = PREFERENCE_FIELDS[wire_name]

    def read_field(
        identity: TokenIdentity = Depends(get_current_identity),
        db: Session = Depends(get_db),
    ) -> list[str]:
        prefs = find_user_document(db, Preference, identity.id)
        return list(getattr(prefs, column) or []) if prefs else []

    def write_field(
        payload: dict = Body(...),
        user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ):
        values = validate_vocabulary(wire_name, payload.get(wire_name), allowed)
        replace_field(db, Preference, user.id, column, values)
        logger.info(f"Saved {wire_name} for {user.username}: {values}")
        return {"message": f"{label} saved successfully"}

    router.add_api_route(path, read_field, methods=["GET"], name=f"get_{column}")
    router.add_api_route(path, write_field, methods=["POST"], name=f"set_{column}")


for _path, (_wire_name, _label) in PREFERENCE_ROUTES.items():
    _register_preference_field(_path, _wire_name, _label)


# =============================================================================
# Favorite recipes
# =============================================================================


@router.get("/favoriteRecipe")
def list_favorite_recipes(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> list[int]:
    return _favorites(db, identity.id)


@router.get("/favoriteRecipe/details")
def favorite_recipe_details(
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> list[dict]:
    """Spoonacular details for each favorite; empty if the lookup fails."""
    return spoonacular_service.get_recipes_bulk(_favorites(db, identity.id))


@router.post("/favoriteRecipe")
def add_favorite_recipe(
    payload: FavoriteRecipeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Add a recipe id to the favorites; adding it twice stores it once."""
    if payload.recipeId is None:
        raise ValidationError("recipeId required")
    added = add_to_set(db, Preference, user.id, "favorite_recipes", payload.recipeId)
    logger.info(f"Favorite {payload.recipeId} for {user.username} (added={added})")
    return {"message": "Favorite recipe saved", "favoriteRecipes": _favorites(db, user.id)}


@router.delete("/favoriteRecipe")
def remove_favorite_recipe(
    payload: FavoriteRecipeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Remove a recipe id if present; removing a missing id is not an error."""
    if payload.recipeId is None:
        raise ValidationError("recipeId required")
    removed = remove_value(db, Preference, user.id, "favorite_recipes", payload.recipeId)
    logger.info(f"Unfavorite {payload.recipeId} for {user.username} (removed={removed})")
    return {"message": "Favorite recipe removed", "favoriteRecipes": _favorites(db, user.id)}
