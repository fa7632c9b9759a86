"""HTTP adapter for the marketplace backend API."""

from .api_client import ApiClient

__all__ = ["ApiClient"]
