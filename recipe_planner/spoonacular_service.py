"""Spoonacular API client for recipe search and details.

Every call is best-effort: network errors, auth errors, and missing data all
return an empty result instead of raising, so callers can decorate a
response without risking it.
"""

import logging

import requests

from .config import get_settings

logger = logging.getLogger(__name__)

SPOONACULAR_API_BASE = "https://api.spoonacular.com"
REQUEST_TIMEOUT = 10


def is_configured() -> bool:
    """Check if a Spoonacular API key is configured."""
    return bool(get_settings().spoonacular_api_key)


def _get(path: str, params: dict) -> dict | list | None:
    """GET a Spoonacular endpoint, returning None on any failure."""
    settings = get_settings()
    if not settings.spoonacular_api_key:
        logger.warning(f"Spoonacular not configured, skipping {path}")
        return None

    try:
        response = requests.get(
            f"{SPOONACULAR_API_BASE}{path}",
            params={**params, "apiKey": settings.spoonacular_api_key},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        logger.warning(f"Spoonacular request to {path} failed: {e}")
        return None
    except ValueError as e:
        logger.warning(f"Spoonacular returned invalid JSON for {path}: {e}")
        return None


def search_recipes(
    query: str,
    cuisines: list[str] | None = None,
    exclude_cuisines: list[str] | None = None,
    diets: list[str] | None = None,
    intolerances: list[str] | None = None,
    number: int = 10,
) -> list[dict]:
    """Search recipes, filtered by the given preference lists."""
    params = {"query": query, "number": number, "addRecipeInformation": "true"}
    if cuisines:
        params["cuisine"] = ",".join(cuisines)
    if exclude_cuisines:
        params["excludeCuisine"] = ",".join(exclude_cuisines)
    if diets:
        params["diet"] = ",".join(diets)
    if intolerances:
        params["intolerances"] = ",".join(intolerances)

    data = _get("/recipes/complexSearch", params)
    if not isinstance(data, dict):
        return []
    return data.get("results") or []


def get_recipe_information(recipe_id: int) -> dict | None:
    """Get full details for one recipe, or None."""
    data = _get(f"/recipes/{recipe_id}/information", {"includeNutrition": "false"})
    return data if isinstance(data, dict) else None


def get_recipes_bulk(recipe_ids: list[int]) -> list[dict]:
    """Get details for several recipes in one request."""
    if not recipe_ids:
        return []
    data = _get("/recipes/informationBulk", {"ids": ",".join(str(i) for i in recipe_ids)})
    return data if isinstance(data, list) else []


def search_ingredients(query: str, number: int = 10) -> list[dict]:
    """Search ingredients by name (used to pick pantry items)."""
    data = _get("/food/ingredients/search", {"query": query, "number": number})
    if not isinstance(data, dict):
        return []
    return data.get("results") or []
