"""Web API for weigh-in."""

from .app import create_app

__all__ = ["create_app"]
