from __future__ import annotations

import logging
import os
from typing import Any, List, Mapping, Optional

import requests

from .models import Recipe
from .storage import CreateFailure, FetchFailure, RecipeRepository

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:4000/recipes"


class HttpRecipeStorage(RecipeRepository):
    """Recipe storage backed by a REST collection resource such as json-server.

    Every call is a single attempt: there is no retry and no timeout, so a
    failure surfaces to the user who can try again.
    """

    def __init__(self, base_url: str, *, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url
        self._session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "HttpRecipeStorage":
        """Build a storage instance from environment variables."""

        base_url = os.environ.get("RECIPES_API_URL", DEFAULT_API_URL)
        return cls(base_url)

    def list_recipes(self) -> List[Recipe]:
        try:
            response = self._session.get(self.base_url)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as exc:
            logger.warning("Recipe API returned an error for GET %s: %s", self.base_url, exc)
            raise FetchFailure("API unavailable") from exc
        except (requests.exceptions.RequestException, ValueError) as exc:
            logger.warning("Could not fetch recipes from %s: %s", self.base_url, exc)
            raise FetchFailure("Unable to fetch recipes") from exc

        if not isinstance(data, list):
            logger.warning("Recipe API returned %s instead of a list", type(data).__name__)
            raise FetchFailure("Unable to fetch recipes")

        try:
            return [Recipe.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as exc:
            logger.warning("Recipe API returned a malformed recipe: %r", exc)
            raise FetchFailure("Unable to fetch recipes") from exc

    def add_recipe(self, payload: Mapping[str, Any]) -> Recipe:
        try:
            response = self._session.post(self.base_url, json=dict(payload))
            response.raise_for_status()
            return Recipe.from_dict(response.json())
        except (requests.exceptions.RequestException, ValueError) as exc:
            logger.warning("Could not create recipe at %s: %s", self.base_url, exc)
            raise CreateFailure("Unable to add recipe") from exc
        except (KeyError, TypeError, AttributeError) as exc:
            logger.warning("Recipe API returned a malformed recipe: %r", exc)
            raise CreateFailure("Unable to add recipe") from exc


__all__ = ["DEFAULT_API_URL", "HttpRecipeStorage"]
