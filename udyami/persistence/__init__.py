"""Hybrid remote/local persistence with per-call fallback."""

from .hybrid_database import HybridDatabaseService

__all__ = ["HybridDatabaseService"]
