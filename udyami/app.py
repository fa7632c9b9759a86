"""
Composition root.

Builds one instance of each service and wires them together. Hosts keep the
returned AppServices and pass it (or its members) to whatever needs them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .api_client import ApiClient
from .config import Config
from .local_store import LocalDatabase
from .notifier import NotificationService, NotificationSettings
from .persistence import HybridDatabaseService
from .shared.key_value_store import JsonFileStore, KeyValueStore
from .shared.records import JobRecord

logger = logging.getLogger(__name__)


@dataclass
class AppServices:
    """The service instances shared by one running application."""

    api_client: ApiClient
    local_db: LocalDatabase
    database: HybridDatabaseService
    notifications: NotificationService

    def post_job(self, job_data: dict[str, Any]) -> tuple[str | None, JobRecord]:
        """
        Store a new job and trigger seller matching for it.

        Args:
            job_data: Job fields from the posting form

        Returns:
            Tuple of (stored job id or None, job registered with the notifier)
        """
        job_id = self.database.create_job(job_data)
        if job_id is None:
            logger.warning("Job could not be stored; notifying sellers anyway")
        job = self.notifications.simulate_post_job({**job_data, "id": job_id})
        return job_id, job


def build_services(config=Config, store: KeyValueStore | None = None) -> AppServices:
    """
    Create and wire the services.

    Args:
        config: Config class or object with the settings attributes
        store: Key-value store for local data (default: JsonFileStore at config.STORAGE_DIR)

    Returns:
        AppServices with every service constructed (not yet initialized)
    """
    api_client = ApiClient(
        base_url=config.API_BASE_URL,
        timeout=config.API_TIMEOUT,
        max_retries=config.API_MAX_RETRIES,
        retry_backoff_factor=config.API_RETRY_BACKOFF_FACTOR,
    )
    local_db = LocalDatabase(store if store is not None else JsonFileStore(config.STORAGE_DIR))
    database = HybridDatabaseService(api_client=api_client, local_db=local_db)
    notifications = NotificationService(
        local_db=local_db, settings=NotificationSettings.from_config(config)
    )
    return AppServices(
        api_client=api_client,
        local_db=local_db,
        database=database,
        notifications=notifications,
    )
