"""
Hybrid Database Service

Selects between the backend API and the local record store for every entity
operation. The choice is made once by a health probe in ``initialize()`` and
kept in ``use_remote_store``. While the backend is selected, each call that
fails remotely is retried against the local store; the selection itself is
not changed by such failures. Only ``initialize()``, ``reconnect_to_cloud()``
and ``force_initialize_local()`` change it.

Entity operations never raise: they return the remote result, the local
result, or an empty value.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from ..api_client import ApiClient
from ..config import Config
from ..local_store import LocalDatabase
from ..local_store.sample_data import REMOTE_DEMO_USERS
from ..shared.records import JOB_STATUSES
from ..shared.structured_logging import get_structured_logger

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HybridDatabaseService:
    """
    Coordinator over the backend API and the local store.

    One instance is created by the application's composition root and
    shared by reference.
    """

    def __init__(self, api_client: ApiClient, local_db: LocalDatabase):
        """
        Initialize the hybrid database service.

        Args:
            api_client: Adapter for the backend API
            local_db: Local record store used as the fallback
        """
        if not api_client:
            raise ValueError("ApiClient is required")
        if not local_db:
            raise ValueError("LocalDatabase is required")

        self.api = api_client
        self.local_db = local_db
        self._use_remote_store = False
        self._lock = threading.Lock()

    @property
    def use_remote_store(self) -> bool:
        with self._lock:
            return self._use_remote_store

    def _set_use_remote_store(self, value: bool) -> None:
        with self._lock:
            self._use_remote_store = value

    def _call(
        self,
        operation: str,
        remote_call: Callable[[], T | None],
        local_call: Callable[[], T],
    ) -> T:
        """
        Run an operation against the selected store with local fallback.

        A None result from the API client means the backend failed; the same
        operation is then issued against the local store.

        Args:
            operation: Operation name for logging
            remote_call: Call against the API client
            local_call: Equivalent call against the local store

        Returns:
            Result of whichever store answered
        """
        if self.use_remote_store:
            log = get_structured_logger(__name__, operation=operation, store="remote")
            try:
                result = remote_call()
            except Exception as e:
                log.error(f"Cloud DB error, falling back to local: {e}", exc_info=True)
            else:
                if result is not None:
                    return result
                log.warning("Backend API unavailable, falling back to local")
        return local_call()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Probe the backend and select the store used by later calls."""
        if self.api.health_check():
            self._set_use_remote_store(True)
            logger.info("Connected to backend API - using cloud database")
            self.initialize_sample_data()
        else:
            self._set_use_remote_store(False)
            logger.info("Backend API not available, using local database")
            self.local_db.initialize_sample_data()

    def force_initialize_local(self) -> None:
        """Select the local store without probing and seed it."""
        self._set_use_remote_store(False)
        self.local_db.initialize_sample_data()
        logger.info("Local database initialized with sample data")

    def reconnect_to_cloud(self) -> bool:
        """
        Re-run the backend health probe.

        Returns:
            True if the backend is reachable and now selected
        """
        if self.api.health_check():
            self._set_use_remote_store(True)
            logger.info("Reconnected to backend API")
            return True

        self._set_use_remote_store(False)
        logger.error("Failed to reconnect to backend API")
        return False

    def initialize_sample_data(self) -> None:
        """Seed demonstration data in whichever store is selected."""
        if not self.use_remote_store:
            self.local_db.initialize_sample_data()
            return

        try:
            for user in REMOTE_DEMO_USERS:
                self.create_user(user)
            logger.info("Sample data initialized in backend API")
        except Exception as e:
            logger.error(f"Error initializing backend data: {e}", exc_info=True)

    @property
    def database_status(self) -> str:
        if self.use_remote_store:
            return Config.DATABASE_STATUS_REMOTE
        return Config.DATABASE_STATUS_LOCAL

    def get_database_status(self) -> str:
        return self.database_status

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, user_data: dict[str, Any]) -> str | None:
        return self._call(
            "create_user",
            lambda: self.api.create_user(user_data),
            lambda: self.local_db.create_user(user_data),
        )

    def get_user_by_id(self, user_id: str) -> dict[str, Any] | None:
        return self._call(
            "get_user_by_id",
            lambda: self.api.get_user(user_id),
            lambda: self.local_db.get_user_by_id(user_id),
        )

    def get_user_by_phone(self, phone_number: str) -> dict[str, Any] | None:
        return self._call(
            "get_user_by_phone",
            lambda: self.api.get_user_by_phone(phone_number),
            lambda: self.local_db.get_user_by_phone(phone_number),
        )

    def get_users(self) -> list[dict[str, Any]]:
        return self._call("get_users", self.api.get_users, self.local_db.get_users)

    def update_user(self, user_id: str, user_data: dict[str, Any]) -> bool:
        def remote() -> bool | None:
            return True if self.api.update_user(user_id, user_data) is not None else None

        return self._call(
            "update_user", remote, lambda: self.local_db.update_user(user_id, user_data)
        )

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def create_job(self, job_data: dict[str, Any]) -> str | None:
        return self._call(
            "create_job",
            lambda: self.api.create_job(job_data),
            lambda: self.local_db.create_job(job_data),
        )

    def get_jobs(self) -> list[dict[str, Any]]:
        return self._call("get_jobs", self.api.get_jobs, self.local_db.get_jobs)

    def get_jobs_by_user(self, user_id: str) -> list[dict[str, Any]]:
        return self._call(
            "get_jobs_by_user",
            lambda: self.api.get_jobs_by_user(user_id),
            lambda: self.local_db.get_jobs_by_user(user_id),
        )

    def update_job_status(self, job_id: str, status: str) -> bool:
        """
        Update the status of a job.

        An unknown status is logged and rejected without contacting either store.

        Returns:
            True if the job was updated, False otherwise
        """
        if status not in JOB_STATUSES:
            logger.error(f"Invalid status '{status}'. Must be one of: {', '.join(JOB_STATUSES)}")
            return False

        def remote() -> bool | None:
            return True if self.api.update_job_status(job_id, status) is not None else None

        return self._call(
            "update_job_status", remote, lambda: self.local_db.update_job_status(job_id, status)
        )

    # ------------------------------------------------------------------
    # Sellers
    # ------------------------------------------------------------------

    def create_seller(self, seller_data: dict[str, Any]) -> str | None:
        return self._call(
            "create_seller",
            lambda: self.api.create_seller(seller_data),
            lambda: self.local_db.create_seller(seller_data),
        )

    def get_sellers(self) -> list[dict[str, Any]]:
        return self._call("get_sellers", self.api.get_sellers, self.local_db.get_sellers)

    def get_seller_by_id(self, seller_id: str) -> dict[str, Any] | None:
        return self._call(
            "get_seller_by_id",
            lambda: self.api.get_seller(seller_id),
            lambda: self.local_db.get_seller_by_id(seller_id),
        )

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def create_service(self, service_data: dict[str, Any]) -> str | None:
        return self._call(
            "create_service",
            lambda: self.api.create_service(service_data),
            lambda: self.local_db.create_service(service_data),
        )

    def get_services(self) -> list[dict[str, Any]]:
        return self._call("get_services", self.api.get_services, self.local_db.get_services)

    def get_services_by_seller(self, seller_id: str) -> list[dict[str, Any]]:
        return self._call(
            "get_services_by_seller",
            lambda: self.api.get_services_by_seller(seller_id),
            lambda: self.local_db.get_services_by_seller(seller_id),
        )

    # ------------------------------------------------------------------
    # Follows
    # ------------------------------------------------------------------

    def follow_seller(self, follower_id: str, following_id: str) -> bool:
        def remote() -> bool | None:
            result = self.api.follow_seller(following_id, follower_id)
            return True if result is not None else None

        return self._call(
            "follow_seller", remote, lambda: self.local_db.follow_seller(follower_id, following_id)
        )

    def unfollow_seller(self, follower_id: str, following_id: str) -> bool:
        def remote() -> bool | None:
            result = self.api.unfollow_seller(following_id, follower_id)
            return True if result is not None else None

        return self._call(
            "unfollow_seller",
            remote,
            lambda: self.local_db.unfollow_seller(follower_id, following_id),
        )

    def get_followed_sellers(self, user_id: str) -> list[dict[str, Any]]:
        return self._call(
            "get_followed_sellers",
            lambda: self.api.get_followed_sellers(user_id),
            lambda: self.local_db.get_followed_sellers(user_id),
        )

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def create_notification(self, notification_data: dict[str, Any]) -> str | None:
        return self._call(
            "create_notification",
            lambda: self.api.create_notification(notification_data),
            lambda: self.local_db.create_notification(notification_data),
        )

    def get_notifications_by_user(self, user_id: str) -> list[dict[str, Any]]:
        return self._call(
            "get_notifications_by_user",
            lambda: self.api.get_notifications(user_id),
            lambda: self.local_db.get_notifications_by_user(user_id),
        )

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    def clear_all_data(self) -> None:
        def remote() -> bool | None:
            return True if self.api.clear_all_data() is not None else None

        self._call("clear_all_data", remote, self.local_db.clear_all_data)

    def get_all_data(self) -> dict[str, Any]:
        """Return every collection from the selected store (debug dump)."""
        return self._call("get_all_data", self.api.get_all_data, self.local_db.get_all_data)
