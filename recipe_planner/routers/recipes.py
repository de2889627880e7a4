"""Recipe search and detail routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import spoonacular_service
from ..database import get_db
from ..errors import NotFoundError
from ..models import AdminRecipe, Preference
from ..security import TokenIdentity, get_current_identity
from ..user_documents import find_user_document

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("/search")
def search_recipes(
    query: str = "",
    number: int = 10,
    identity: TokenIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Search Spoonacular using the caller's saved preferences as filters.

    Curated admin recipes whose title contains the query are returned
    alongside.
    """
    prefs = find_user_document(db, Preference, identity.id)
    results = spoonacular_service.search_recipes(
        query,
        cuisines=prefs.cuisine_like if prefs else None,
        exclude_cuisines=prefs.cuisine_dislike if prefs else None,
        diets=prefs.diet if prefs else None,
        intolerances=prefs.intolerances if prefs else None,
        number=max(1, min(number, 100)),
    )

    curated_query = db.query(AdminRecipe)
    if query:
        curated_query = curated_query.filter(AdminRecipe.title.ilike(f"%{query}%"))
    curated = [recipe.to_dict() for recipe in curated_query.order_by(AdminRecipe.title).all()]

    return {"results": results, "curated": curated}


@router.get("/{recipe_id}")
def get_recipe(
    recipe_id: int,
    identity: TokenIdentity = Depends(get_current_identity),
):
    recipe = spoonacular_service.get_recipe_information(recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe
