"""Web API for hoop-metrics."""

from .app import create_app

__all__ = ["create_app"]
