import os
import uuid
from typing import Optional

from flask import Flask, flash, redirect, render_template, request, session, url_for

from .browser import BrowserSessions, RecipeBrowser
from .forms import DRAFT_FIELDS, FORM_FIELDS, missing_required_fields
from .http_storage import DEFAULT_API_URL, HttpRecipeStorage
from .models import Recipe
from .storage import RecipeRepository

SESSION_KEY = "browser_id"


def create_app(storage: Optional[RecipeRepository] = None) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` the application talks to the
        recipe API configured through the ``RECIPES_API_URL`` environment
        variable.
    """

    app = Flask(__name__)
    app.secret_key = os.environ.get("FLASK_SECRET_KEY", "development-secret-change-me")

    if storage is None:
        storage = HttpRecipeStorage.from_env()
    app.config["RECIPE_STORAGE"] = storage
    app.config["RECIPES_API_URL"] = getattr(
        storage, "base_url", os.environ.get("RECIPES_API_URL", DEFAULT_API_URL)
    )
    app.config["MAX_BROWSER_SESSIONS"] = int(os.environ.get("MAX_BROWSER_SESSIONS", "256"))
    app.config["BROWSER_SESSIONS"] = BrowserSessions(
        storage, max_sessions=app.config["MAX_BROWSER_SESSIONS"]
    )

    def current_browser() -> RecipeBrowser:
        session_id = session.get(SESSION_KEY)
        if session_id is None:
            session_id = uuid.uuid4().hex
            session[SESSION_KEY] = session_id
        return app.config["BROWSER_SESSIONS"].get(session_id)

    @app.get("/")
    def index() -> str:
        browser = current_browser()

        if not browser.loaded or request.args.get("reload") == "1":
            browser.load()
        if "q" in request.args:
            browser.set_query(request.args["q"])
        if "selected" in request.args:
            browser.select(browser.find_id(request.args["selected"]))

        return render_template(
            "index.html",
            browser=browser,
            filtered=browser.filtered,
            selected_recipe=browser.selected,
            form_fields=FORM_FIELDS,
            api_url=app.config["RECIPES_API_URL"],
            title="Cookbook workspace",
        )

    @app.post("/recipes")
    def create_recipe() -> str:
        browser = current_browser()

        if browser.saving:
            flash("A recipe is already being saved.", "error")
            return redirect(url_for("index"))

        for name in DRAFT_FIELDS:
            browser.update_field(name, request.form.get(name, ""))

        missing = missing_required_fields(browser.draft)
        if missing:
            flash(f"Please provide the recipe {', '.join(missing)}.", "error")
            return redirect(url_for("index"))

        title = browser.draft["title"]
        if browser.submit():
            flash(f"Recipe '{title}' saved.", "success")

        return redirect(url_for("index"))

    return app


__all__ = ["create_app", "Recipe"]
