from pathlib import Path
import sys
from unittest.mock import Mock, patch

import pytest
import requests

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pantry_pages.http_storage import DEFAULT_API_URL, HttpRecipeStorage
from pantry_pages.storage import CreateFailure, FetchFailure

API_URL = "http://recipes.test/recipes"


def make_response(json_data=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


def make_storage(response=None, error=None):
    session = Mock(spec=requests.Session)
    for method in (session.get, session.post):
        if error is not None:
            method.side_effect = error
        else:
            method.return_value = response
    return HttpRecipeStorage(API_URL, session=session), session


def test_list_recipes_parses_collection():
    storage, session = make_storage(
        make_response(
            [
                {"id": 1, "title": "A", "servings": 4, "tags": ["vegan"]},
                {"id": "b2", "title": "B"},
            ]
        )
    )

    recipes = storage.list_recipes()

    session.get.assert_called_once_with(API_URL)
    assert [recipe.id for recipe in recipes] == [1, "b2"]
    assert recipes[0].servings == "4"
    assert recipes[0].tags == ["vegan"]
    assert recipes[1].ingredients == []
    assert recipes[1].cuisine is None


def test_list_recipes_accepts_empty_collection():
    storage, _ = make_storage(make_response([]))

    assert storage.list_recipes() == []


def test_list_recipes_error_status():
    storage, _ = make_storage(make_response(status_code=500))

    with pytest.raises(FetchFailure, match="API unavailable"):
        storage.list_recipes()


def test_list_recipes_connection_error():
    storage, _ = make_storage(error=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(FetchFailure, match="Unable to fetch recipes"):
        storage.list_recipes()


def test_list_recipes_invalid_json():
    response = make_response()
    response.json.side_effect = ValueError("Expecting value")
    storage, _ = make_storage(response)

    with pytest.raises(FetchFailure):
        storage.list_recipes()


def test_list_recipes_rejects_non_list_body():
    storage, _ = make_storage(make_response({"recipes": []}))

    with pytest.raises(FetchFailure):
        storage.list_recipes()


def test_list_recipes_rejects_recipe_without_id():
    storage, _ = make_storage(make_response([{"title": "Nameless"}]))

    with pytest.raises(FetchFailure):
        storage.list_recipes()


def test_add_recipe_posts_json_payload():
    payload = {
        "title": "Smoky tofu tacos",
        "servings": "4",
        "tags": ["vegan", "weeknight"],
        "ingredients": ["tofu", "lime"],
        "instructions": "Sear and assemble.",
    }
    storage, session = make_storage(make_response({**payload, "id": 12}, status_code=201))

    created = storage.add_recipe(payload)

    session.post.assert_called_once_with(API_URL, json=payload)
    assert created.id == 12
    assert created.title == "Smoky tofu tacos"
    assert created.ingredients == ["tofu", "lime"]
    assert created.servings == "4"


def test_add_recipe_error_status():
    storage, _ = make_storage(make_response(status_code=422))

    with pytest.raises(CreateFailure, match="Unable to add recipe"):
        storage.add_recipe({"title": "X"})


def test_add_recipe_connection_error():
    storage, _ = make_storage(error=requests.exceptions.Timeout("slow"))

    with pytest.raises(CreateFailure):
        storage.add_recipe({"title": "X"})


def test_add_recipe_response_without_id():
    storage, _ = make_storage(make_response({"title": "X"}, status_code=201))

    with pytest.raises(CreateFailure):
        storage.add_recipe({"title": "X"})


@patch.dict("os.environ", {"RECIPES_API_URL": API_URL})
def test_from_env_reads_api_url():
    assert HttpRecipeStorage.from_env().base_url == API_URL


@patch.dict("os.environ", {}, clear=True)
def test_from_env_defaults_to_local_json_server():
    assert HttpRecipeStorage.from_env().base_url == DEFAULT_API_URL


def test_list_recipes_wraps_scalar_list_fields():
    storage, _ = make_storage(
        make_response([{"id": 1, "title": "A", "tags": "vegan", "ingredients": "tofu"}])
    )

    recipe = storage.list_recipes()[0]

    assert recipe.tags == ["vegan"]
    assert recipe.ingredients == ["tofu"]
