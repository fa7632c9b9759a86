"""
Shared infrastructure for services.

This package contains shared building blocks used across multiple services,
such as key-value storage, record types and structured logging.
"""

from .key_value_store import InMemoryStore, JsonFileStore, KeyValueStore
from .records import JobRecord, NotificationRecord, SellerRecord
from .structured_logging import configure_logging, get_structured_logger

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "JobRecord",
    "NotificationRecord",
    "SellerRecord",
    "configure_logging",
    "get_structured_logger",
]
