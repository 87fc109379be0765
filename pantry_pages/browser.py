from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Sequence

from .forms import build_payload, empty_draft
from .models import Recipe
from .search import filter_recipes
from .storage import CreateFailure, FetchFailure, RecipeRepository


def resolve_selection(filtered: Sequence[Recipe], selected_id: Any) -> Optional[Recipe]:
    """Return the recipe to display for ``selected_id``.

    Falls back to the first filtered recipe when the selection is unset or has
    been filtered out, and to ``None`` when nothing matches the search.
    """

    for recipe in filtered:
        if recipe.id == selected_id:
            return recipe
    return filtered[0] if filtered else None


class RecipeBrowser:
    """State of one browsing session: recipe list, search, selection and draft.

    Each public method is one user or lifecycle action and commits a single
    state update once the storage call has settled.
    """

    def __init__(self, storage: RecipeRepository) -> None:
        self._storage = storage
        self.recipes: List[Recipe] = []
        self.query = ""
        self.selected_id: Any = None
        self.draft: Dict[str, str] = empty_draft()
        self.loaded = False
        self.loading = False
        self.saving = False
        self.error = ""

    @property
    def filtered(self) -> List[Recipe]:
        return filter_recipes(self.recipes, self.query)

    @property
    def selected(self) -> Optional[Recipe]:
        return resolve_selection(self.filtered, self.selected_id)

    def load(self) -> None:
        """Fetch the full recipe list and select the first recipe."""

        self.loading = True
        try:
            recipes = list(self._storage.list_recipes())
        except FetchFailure as exc:
            self.error = str(exc) or "Unable to fetch recipes"
        else:
            self.recipes = recipes
            self.selected_id = recipes[0].id if recipes else None
            self.error = ""
        finally:
            self.loading = False
            self.loaded = True

    def set_query(self, query: str) -> None:
        self.query = query

    def select(self, recipe_id: Any) -> None:
        # Not checked against the current filter; ``selected`` falls back.
        self.selected_id = recipe_id

    def find_id(self, raw_id: str) -> Any:
        """Map an id received as text back to the id of a loaded recipe."""

        for recipe in self.recipes:
            if str(recipe.id) == raw_id:
                return recipe.id
        return raw_id

    def update_field(self, name: str, value: str) -> None:
        if name not in self.draft:
            raise KeyError(name)
        self.draft = {**self.draft, name: value}

    def submit(self) -> bool:
        """Create a recipe from the draft.

        On success the new recipe is appended and selected and the draft is
        cleared. On failure the list and the draft are left as they were and
        :attr:`error` holds the message to show.
        """

        payload = build_payload(self.draft)
        self.saving = True
        try:
            created = self._storage.add_recipe(payload)
        except CreateFailure as exc:
            self.error = str(exc) or "Unable to add recipe"
            return False
        finally:
            self.saving = False

        self.recipes = [*self.recipes, created]
        self.selected_id = created.id
        self.error = ""
        self.draft = empty_draft()
        return True


class BrowserSessions:
    """Hands out one :class:`RecipeBrowser` per browser session id.

    At most ``max_sessions`` browsers are kept; the least recently used one
    is dropped to make room for a new session.
    """

    def __init__(self, storage: RecipeRepository, max_sessions: int = 256) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._storage = storage
        self._max_sessions = max_sessions
        self._browsers: "OrderedDict[str, RecipeBrowser]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> RecipeBrowser:
        with self._lock:
            browser = self._browsers.get(session_id)
            if browser is None:
                browser = RecipeBrowser(self._storage)
                self._browsers[session_id] = browser
                while len(self._browsers) > self._max_sessions:
                    self._browsers.popitem(last=False)
            else:
                self._browsers.move_to_end(session_id)
            return browser

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._browsers

    def __len__(self) -> int:
        return len(self._browsers)


__all__ = ["BrowserSessions", "RecipeBrowser", "resolve_selection"]
