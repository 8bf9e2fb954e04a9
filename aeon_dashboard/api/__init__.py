"""HTTP surface of the dashboard backend."""

from aeon_dashboard.api.app import create_app

__all__ = ["create_app"]
