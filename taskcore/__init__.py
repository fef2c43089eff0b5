"""Personal task manager API: owner-scoped task lifecycle with an admin role gate."""

from .app_factory import create_app

__all__ = ["create_app"]
