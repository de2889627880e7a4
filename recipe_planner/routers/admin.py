"""Admin routes: moderation, curated recipes, statistics, account upkeep.

Every route requires a token with the admin role.
"""

import logging
from collections import Counter

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..constants import CUISINES, DIETS, TOP_FAVORITES_LIMIT, TOP_PREFERENCES_LIMIT
from ..database import get_db
from ..errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from ..models import AdminRecipe, BannedWord, Cart, KrogerToken, Pantry, Preference, User
from ..moderation import find_violations
from ..schemas import (
    AdminRecipeRequest,
    BanWordRequest,
    RecipeCuisinesRequest,
    RecipeDietsRequest,
    RenameUserRequest,
    UserIdRequest,
)
from ..security import TokenIdentity, require_admin
from ..validation import validate_ban_word, validate_username, validate_vocabulary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"], dependencies=[Depends(require_admin)])


# =============================================================================
# Banned words
# =============================================================================


@router.post("/adminBan/add")
def add_ban_word(
    payload: BanWordRequest,
    identity: TokenIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    word = validate_ban_word(payload.word)
    if db.query(BannedWord).filter(BannedWord.word == word).first():
        raise ConflictError("Ban word already exists")

    admin = db.get(User, identity.id)
    db.add(BannedWord(word=word, added_by=admin.username if admin else None))
    db.flush()
    logger.info(f"Ban word added: {word}")
    return {"message": "Ban word added"}


@router.api_route("/adminBan/list", methods=["GET", "POST"])
def list_ban_words(db: Session = Depends(get_db)) -> list[dict]:
    return [w.to_dict() for w in db.query(BannedWord).order_by(BannedWord.word).all()]


@router.api_route("/adminBan/violations", methods=["GET", "POST"])
def list_violations(db: Session = Depends(get_db)) -> list[dict]:
    """Users whose username or names contain any banned word."""
    words = [w.word for w in db.query(BannedWord).all()]
    users = db.query(User).order_by(User.id).all()
    return [v.to_dict() for v in find_violations(users, words)]


@router.post("/adminBan/remove")
def remove_ban_word(payload: BanWordRequest, db: Session = Depends(get_db)):
    if not payload.word:
        raise ValidationError("Missing ban word")
    banned = db.query(BannedWord).filter(BannedWord.word == payload.word.lower()).first()
    if banned is None:
        raise NotFoundError("Ban word not found")
    db.delete(banned)
    db.flush()
    logger.info(f"Ban word removed: {banned.word}")
    return {"message": "Ban word deleted successfully"}


# =============================================================================
# Curated recipes
# =============================================================================


def _get_recipe(db: Session, recipe_id: int | None) -> AdminRecipe:
    if recipe_id is None:
        raise ValidationError("Missing recipeId")
    recipe = db.get(AdminRecipe, recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe


@router.post("/adminCreateRecipe")
def create_recipe(payload: AdminRecipeRequest, db: Session = Depends(get_db)):
    if not payload.title or not payload.instructions or not payload.ingredients:
        raise ValidationError("Missing a required field")
    if db.query(AdminRecipe).filter(AdminRecipe.title == payload.title).first():
        raise ConflictError("This recipe already exists")

    recipe = AdminRecipe(
        title=payload.title,
        instructions=payload.instructions,
        ingredients=list(payload.ingredients),
        summary=payload.summary,
        ready_in_minutes=payload.readyInMinutes,
        diets=[],
        cuisines=[],
    )
    db.add(recipe)
    db.flush()
    logger.info(f"Created recipe {recipe.id}: {recipe.title}")
    return {"message": "Create new recipe successful", "recipe": recipe.to_dict()}


@router.post("/adminCuisine")
def set_recipe_cuisines(payload: RecipeCuisinesRequest, db: Session = Depends(get_db)):
    recipe = _get_recipe(db, payload.recipeId)
    recipe.cuisines = validate_vocabulary("cuisines", payload.cuisines, CUISINES)
    db.flush()
    return {"message": "Cuisine successfully added", "recipe": recipe.to_dict()}


@router.post("/adminDiet")
def set_recipe_diets(payload: RecipeDietsRequest, db: Session = Depends(get_db)):
    recipe = _get_recipe(db, payload.recipeId)
    recipe.diets = validate_vocabulary("diets", payload.diets, DIETS)
    db.flush()
    return {"message": "Diets successfully added", "recipe": recipe.to_dict()}


@router.get("/adminRecipes")
def list_recipes(db: Session = Depends(get_db)) -> list[dict]:
    return [r.to_dict() for r in db.query(AdminRecipe).order_by(AdminRecipe.id).all()]


# =============================================================================
# Statistics
# =============================================================================


def _top(counter: Counter, limit: int, key: str) -> list[dict]:
    return [{key: value, "count": count} for value, count in counter.most_common(limit)]


@router.get("/adminTop/top-favorites")
def top_favorites(db: Session = Depends(get_db)) -> list[dict]:
    """Most-favorited recipe ids across all users."""
    counts = Counter()
    for prefs in db.query(Preference).all():
        counts.update(set(prefs.favorite_recipes or []))
    return _top(counts, TOP_FAVORITES_LIMIT, "recipeId")


@router.get("/adminTop/user-preferences")
def top_user_preferences(db: Session = Depends(get_db)):
    """Most common diets, intolerances, and liked/disliked cuisines."""
    diets, intolerances, liked, disliked = Counter(), Counter(), Counter(), Counter()
    for prefs in db.query(Preference).all():
        diets.update(prefs.diet or [])
        intolerances.update(prefs.intolerances or [])
        liked.update(prefs.cuisine_like or [])
        disliked.update(prefs.cuisine_dislike or [])

    return {
        "topDiets": _top(diets, TOP_PREFERENCES_LIMIT, "value"),
        "topIntolerances": _top(intolerances, TOP_PREFERENCES_LIMIT, "value"),
        "topLikedCuisines": _top(liked, TOP_PREFERENCES_LIMIT, "value"),
        "topDislikedCuisines": _top(disliked, TOP_PREFERENCES_LIMIT, "value"),
    }


# =============================================================================
# Account maintenance
# =============================================================================


@router.get("/adminMaintain")
def list_users(db: Session = Depends(get_db)) -> list[dict]:
    return [{"id": u.id, "username": u.username} for u in db.query(User).order_by(User.id).all()]


@router.put("/adminMaintain")
def rename_user(
    payload: RenameUserRequest,
    identity: TokenIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Change a user's username; admins may only rename themselves."""
    if payload.userId is None or not payload.username:
        raise ValidationError("Missing userId or username")
    validate_username(payload.username)

    target = db.get(User, payload.userId)
    if target is None:
        raise NotFoundError("User not found")
    if target.is_admin and target.id != identity.id:
        raise ForbiddenError("You cannot edit another admin account")
    if db.query(User).filter(User.username == payload.username, User.id != target.id).first():
        raise ConflictError("Username already exists")

    logger.info(f"Renaming user {target.id}: {target.username} -> {payload.username}")
    target.username = payload.username
    db.flush()
    return {"message": "Username updated"}


@router.delete("/adminMaintain")
def delete_user(
    payload: UserIdRequest,
    identity: TokenIdentity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Delete a regular account together with all of its per-user rows."""
    if payload.userId is None:
        raise ValidationError("Missing userId")

    target = db.get(User, payload.userId)
    if target is None:
        raise NotFoundError("User not found")
    if target.id == identity.id:
        raise ValidationError("You cannot delete your own account")
    if target.is_admin:
        raise ValidationError("You cannot delete another admin account")

    for model in (Preference, Cart, Pantry, KrogerToken):
        db.query(model).filter(model.user_id == target.id).delete(synchronize_session=False)
    db.delete(target)
    db.flush()
    logger.info(f"Deleted user {payload.userId}")
    return {"message": "User deleted successfully"}
