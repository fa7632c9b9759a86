"""Local record storage used when the backend API is unavailable."""

from .local_database import COLLECTIONS, LocalDatabase

__all__ = ["LocalDatabase", "COLLECTIONS"]
