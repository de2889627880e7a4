"""Tests for the Spoonacular API client."""

import os
from unittest.mock import MagicMock, patch

import pytest
import requests

from recipe_planner import spoonacular_service


@pytest.fixture(autouse=True)
def api_key():
    with patch.dict(os.environ, {"SPOONACULAR_API_KEY": "spoon-key"}):
        yield


def fake_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class TestSearchRecipes:
    def test_filters_are_joined(self):
        with patch(
            "recipe_planner.spoonacular_service.requests.get",
            return_value=fake_response({"results": [{"id": 1}]}),
        ) as get:
            results = spoonacular_service.search_recipes(
                "pasta",
                cuisines=["Italian", "Greek"],
                exclude_cuisines=["French"],
                diets=["Vegetarian"],
                intolerances=["Gluten", "Dairy"],
            )

        assert results == [{"id": 1}]
        params = get.call_args.kwargs["params"]
        assert params["cuisine"] == "Italian,Greek"
        assert params["excludeCuisine"] == "French"
        assert params["diet"] == "Vegetarian"
        assert params["intolerances"] == "Gluten,Dairy"
        assert params["apiKey"] == "spoon-key"

    def test_empty_filters_are_omitted(self):
        with patch(
            "recipe_planner.spoonacular_service.requests.get",
            return_value=fake_response({"results": []}),
        ) as get:
            spoonacular_service.search_recipes("pasta", cuisines=[])
        assert "cuisine" not in get.call_args.kwargs["params"]

    def test_request_failure_is_empty(self):
        with patch("recipe_planner.spoonacular_service.requests.get", side_effect=requests.Timeout("slow")):
            assert spoonacular_service.search_recipes("pasta") == []

    def test_invalid_json_is_empty(self):
        response = MagicMock()
        response.raise_for_status.return_value = None
        response.json.side_effect = ValueError("not json")
        with patch("recipe_planner.spoonacular_service.requests.get", return_value=response):
            assert spoonacular_service.search_recipes("pasta") == []

    def test_no_api_key_skips_request(self):
        with patch.dict(os.environ, {"SPOONACULAR_API_KEY": ""}), patch(
            "recipe_planner.spoonacular_service.requests.get"
        ) as get:
            assert spoonacular_service.search_recipes("pasta") == []
        get.assert_not_called()


class TestRecipeLookups:
    def test_bulk_skips_request_for_no_ids(self):
        with patch("recipe_planner.spoonacular_service.requests.get") as get:
            assert spoonacular_service.get_recipes_bulk([]) == []
        get.assert_not_called()

    def test_bulk_joins_ids(self):
        with patch(
            "recipe_planner.spoonacular_service.requests.get",
            return_value=fake_response([{"id": 1}, {"id": 2}]),
        ) as get:
            assert spoonacular_service.get_recipes_bulk([1, 2]) == [{"id": 1}, {"id": 2}]
        assert get.call_args.kwargs["params"]["ids"] == "1,2"

    def test_information_non_dict_is_none(self):
        with patch("recipe_planner.spoonacular_service.requests.get", return_value=fake_response([])):
            assert spoonacular_service.get_recipe_information(1) is None


@pytest.mark.parametrize(
    "call, payload",
    [
        (lambda: spoonacular_service.search_recipes("pasta"), [{"id": 1}]),
        (lambda: spoonacular_service.get_recipes_bulk([1]), {"id": 1}),
        (lambda: spoonacular_service.search_ingredients("flour"), "rate limited"),
    ],
)
def test_wrong_json_shape_is_empty(call, payload):
    with patch("recipe_planner.spoonacular_service.requests.get", return_value=fake_response(payload)):
        assert call() == []
