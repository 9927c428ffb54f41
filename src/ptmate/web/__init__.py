"""Web API for ptmate."""

from .app import create_app

__all__ = ["create_app"]
