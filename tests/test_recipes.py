"""Tests for recipe search and detail routes."""

from unittest.mock import patch

from recipe_planner.models import AdminRecipe


class TestRecipeSearch:
    def test_search_passes_saved_preferences(self, client, user_headers):
        client.post("/api/cuisineLike", json={"cuisineLike": ["Thai"]}, headers=user_headers)
        client.post("/api/intolerance", json={"intolerances": ["Peanut"]}, headers=user_headers)

        with patch("recipe_planner.spoonacular_service.search_recipes", return_value=[{"id": 1}]) as search:
            response = client.get("/api/recipes/search", params={"query": "noodles"}, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["results"] == [{"id": 1}]
        search.assert_called_once_with(
            "noodles",
            cuisines=["Thai"],
            exclude_cuisines=[],
            diets=[],
            intolerances=["Peanut"],
            number=10,
        )

    def test_search_includes_matching_curated_recipes(self, client, user_headers, db):
        db.add_all(
            [
                AdminRecipe(title="Grandma's Noodle Soup", instructions="Simmer.", ingredients=["noodles"]),
                AdminRecipe(title="Toast", instructions="Toast it.", ingredients=["bread"]),
            ]
        )
        db.commit()

        with patch("recipe_planner.spoonacular_service.search_recipes", return_value=[]):
            response = client.get("/api/recipes/search", params={"query": "noodle"}, headers=user_headers)

        assert [r["title"] for r in response.json()["curated"]] == ["Grandma's Noodle Soup"]

    def test_search_without_api_key_is_empty(self, client, user_headers):
        response = client.get("/api/recipes/search", params={"query": "pasta"}, headers=user_headers)
        assert response.status_code == 200
        assert response.json() == {"results": [], "curated": []}


class TestRecipeDetails:
    def test_details(self, client, user_headers):
        recipe = {"id": 715538, "title": "Bruschetta"}
        with patch("recipe_planner.spoonacular_service.get_recipe_information", return_value=recipe):
            response = client.get("/api/recipes/715538", headers=user_headers)
        assert response.json() == recipe

    def test_unknown_recipe(self, client, user_headers):
        with patch("recipe_planner.spoonacular_service.get_recipe_information", return_value=None):
            response = client.get("/api/recipes/1", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Recipe not found"
