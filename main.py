"""WSGI entrypoint for the Pantry Pages application.

The Flask development server is not started from this module; use
``flask --app main run`` locally or point a WSGI server such as Gunicorn at
``main:app``.
"""

from pantry_pages import create_app

app = create_app()


__all__ = ["app"]
