"""HTTP API for carbon calculations."""

from carbonmap.server.app import app, create_app

__all__ = ["app", "create_app"]
