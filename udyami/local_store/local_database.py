"""
Local Record Store

Record storage for the marketplace entities on top of a KeyValueStore. Each
collection (users, jobs, sellers, services, follows, notifications) is kept
as one JSON array under its own key and rewritten in full on every change.

Reads are fail-open: a missing, unreadable or corrupt collection is treated
as empty. Writes report failure through their return value instead of
raising.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from ..shared.key_value_store import KeyValueStore
from ..shared.records import JOB_STATUS_OPEN, JOB_STATUSES, utc_now
from . import sample_data

logger = logging.getLogger(__name__)

USERS = "users"
JOBS = "jobs"
SELLERS = "sellers"
SERVICES = "services"
FOLLOWS = "follows"
NOTIFICATIONS = "notifications"
COLLECTIONS = (USERS, JOBS, SELLERS, SERVICES, FOLLOWS, NOTIFICATIONS)


class LocalDatabase:
    """Record store used when the backend API is unavailable."""

    def __init__(self, store: KeyValueStore):
        """
        Initialize the local database.

        Args:
            store: Key-value storage holding one entry per collection
        """
        if store is None:
            raise ValueError("KeyValueStore is required")
        self.store = store

    # ------------------------------------------------------------------
    # Collection primitives
    # ------------------------------------------------------------------

    def read_collection(self, name: str) -> list[dict[str, Any]]:
        """
        Read every record of a collection.

        Args:
            name: Collection name

        Returns:
            List of records; empty if the entry is missing or cannot be parsed
        """
        try:
            raw = self.store.get_item(name)
            if not raw:
                return []
            records = json.loads(raw)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {name}: {e}")
            return []

        if not isinstance(records, list):
            logger.error(f"Error reading {name}: stored value is not a list")
            return []
        return [record for record in records if isinstance(record, dict)]

    def write_collection(self, name: str, records: list[dict[str, Any]]) -> bool:
        """
        Replace a collection with the given records.

        Args:
            name: Collection name
            records: Full list of records to store

        Returns:
            True if the write succeeded, False otherwise
        """
        try:
            self.store.set_item(name, json.dumps(records, default=str))
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving {name}: {e}", exc_info=True)
            return False

    def _generate_id(self) -> str:
        return str(uuid.uuid4())

    def _create(self, collection: str, data: dict[str, Any], **overrides: Any) -> str | None:
        """Append a new record with a fresh id and timestamps."""
        records = self.read_collection(collection)
        now = utc_now().isoformat()
        record = {
            "id": self._generate_id(),
            **data,
            **overrides,
            "created_at": now,
            "updated_at": now,
        }
        records.append(record)
        if not self.write_collection(collection, records):
            return None
        logger.info(f"Created {collection} record {record['id']}")
        return record["id"]

    def _get_by_field(self, collection: str, field: str, value: Any) -> dict[str, Any] | None:
        for record in self.read_collection(collection):
            if record.get(field) == value:
                return record
        return None

    def _filter_by_field(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        return [r for r in self.read_collection(collection) if r.get(field) == value]

    def update(self, collection: str, record_id: str, patch: dict[str, Any]) -> bool:
        """
        Apply a partial update to one record.

        Args:
            collection: Collection name
            record_id: Record ID
            patch: Fields to overwrite

        Returns:
            True if the record was found and saved, False otherwise
        """
        records = self.read_collection(collection)
        for record in records:
            if record.get("id") == record_id:
                record.update({k: v for k, v in patch.items() if k not in ("id", "created_at")})
                record["updated_at"] = utc_now().isoformat()
                return self.write_collection(collection, records)
        logger.debug(f"No {collection} record {record_id} to update")
        return False

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, user_data: dict[str, Any]) -> str | None:
        return self._create(USERS, user_data)

    def get_users(self) -> list[dict[str, Any]]:
        return self.read_collection(USERS)

    def get_user_by_id(self, user_id: str) -> dict[str, Any] | None:
        return self._get_by_field(USERS, "id", user_id)

    def get_user_by_phone(self, phone_number: str) -> dict[str, Any] | None:
        return self._get_by_field(USERS, "phone_number", phone_number)

    def update_user(self, user_id: str, user_data: dict[str, Any]) -> bool:
        return self.update(USERS, user_id, user_data)

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def create_job(self, job_data: dict[str, Any]) -> str | None:
        """Create a job. New jobs are always open with no applicants."""
        return self._create(JOBS, job_data, status=JOB_STATUS_OPEN, applicants=[])

    def get_jobs(self) -> list[dict[str, Any]]:
        return self.read_collection(JOBS)

    def get_job_by_id(self, job_id: str) -> dict[str, Any] | None:
        return self._get_by_field(JOBS, "id", job_id)

    def get_jobs_by_user(self, user_id: str) -> list[dict[str, Any]]:
        return self._filter_by_field(JOBS, "buyer_id", user_id)

    def update_job_status(self, job_id: str, status: str) -> bool:
        """
        Update the status of a job.

        Returns:
            True if the job was updated; False if it is missing, the status is
            unknown or the write failed
        """
        if status not in JOB_STATUSES:
            logger.error(f"Invalid status '{status}'. Must be one of: {', '.join(JOB_STATUSES)}")
            return False
        updated = self.update(JOBS, job_id, {"status": status})
        if updated:
            logger.info(f"Job status updated: {job_id} -> {status}")
        return updated

    # ------------------------------------------------------------------
    # Sellers
    # ------------------------------------------------------------------

    def create_seller(self, seller_data: dict[str, Any]) -> str | None:
        defaults = {"rating": 0, "total_ratings": 0, "followers": 0, "verified": False}
        return self._create(SELLERS, {**defaults, **seller_data})

    def get_sellers(self) -> list[dict[str, Any]]:
        return self.read_collection(SELLERS)

    def get_seller_by_id(self, seller_id: str) -> dict[str, Any] | None:
        return self._get_by_field(SELLERS, "id", seller_id)

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def create_service(self, service_data: dict[str, Any]) -> str | None:
        return self._create(SERVICES, {"active": True, **service_data})

    def get_services(self) -> list[dict[str, Any]]:
        return self.read_collection(SERVICES)

    def get_services_by_seller(self, seller_id: str) -> list[dict[str, Any]]:
        return self._filter_by_field(SERVICES, "seller_id", seller_id)

    # ------------------------------------------------------------------
    # Follows
    # ------------------------------------------------------------------

    def follow_seller(self, follower_id: str, following_id: str) -> bool:
        """
        Record that a user follows a seller. Following twice is a no-op.

        Returns:
            True if the follow exists after the call, False if saving failed
        """
        follows = self.get_follows()
        for follow in follows:
            if follow.get("follower_id") == follower_id and follow.get("following_id") == following_id:
                return True

        follows.append(
            {
                "id": self._generate_id(),
                "follower_id": follower_id,
                "following_id": following_id,
                "created_at": utc_now().isoformat(),
            }
        )
        saved = self.write_collection(FOLLOWS, follows)
        if saved:
            logger.info(f"Follow created: {follower_id} -> {following_id}")
        return saved

    def unfollow_seller(self, follower_id: str, following_id: str) -> bool:
        follows = [
            f
            for f in self.get_follows()
            if not (f.get("follower_id") == follower_id and f.get("following_id") == following_id)
        ]
        saved = self.write_collection(FOLLOWS, follows)
        if saved:
            logger.info(f"Follow removed: {follower_id} -> {following_id}")
        return saved

    def get_follows(self) -> list[dict[str, Any]]:
        return self.read_collection(FOLLOWS)

    def get_followed_sellers(self, user_id: str) -> list[dict[str, Any]]:
        followed_ids = {
            f.get("following_id") for f in self.get_follows() if f.get("follower_id") == user_id
        }
        return [seller for seller in self.get_sellers() if seller.get("id") in followed_ids]

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def create_notification(self, notification_data: dict[str, Any]) -> str | None:
        records = self.read_collection(NOTIFICATIONS)
        record = {
            "id": self._generate_id(),
            **notification_data,
            "read": False,
            "created_at": utc_now().isoformat(),
        }
        records.append(record)
        if not self.write_collection(NOTIFICATIONS, records):
            return None
        logger.info(f"Created notifications record {record['id']}")
        return record["id"]

    def get_notifications(self) -> list[dict[str, Any]]:
        return self.read_collection(NOTIFICATIONS)

    def get_notifications_by_user(self, user_id: str) -> list[dict[str, Any]]:
        return self._filter_by_field(NOTIFICATIONS, "user_id", user_id)

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    def clear_all_data(self) -> None:
        """Remove every collection. Each removal is attempted independently."""
        for name in COLLECTIONS:
            try:
                self.store.remove_item(name)
            except OSError as e:
                logger.error(f"Failed to clear {name}: {e}")
        logger.info("All local data cleared")

    def get_all_data(self) -> dict[str, list[dict[str, Any]]]:
        """Return every collection, keyed by name (debug dump)."""
        return {name: self.read_collection(name) for name in COLLECTIONS}

    def initialize_sample_data(self) -> bool:
        """
        Seed sample users, sellers, jobs and services into an empty store.

        Runs only when the users collection is empty.

        Returns:
            True if data was seeded, False if the store already had users
        """
        if self.get_users():
            logger.debug("Sample data skipped: users already present")
            return False

        logger.info("Initializing sample data...")
        buyer_id = self.create_user(sample_data.BUYER_USER)
        painter_id = self.create_user(sample_data.PAINTER_USER)

        self.create_seller({"user_id": painter_id, **sample_data.PAINTER_SELLER})
        for job in sample_data.BUYER_JOBS:
            self.create_job({**job, "buyer_id": buyer_id})
        for service in sample_data.PAINTER_SERVICES:
            self.create_service({**service, "seller_id": painter_id})

        plumber_id = self.create_user(sample_data.PLUMBER_USER)
        self.create_seller({"user_id": plumber_id, **sample_data.PLUMBER_SELLER})
        for service in sample_data.PLUMBER_SERVICES:
            self.create_service({**service, "seller_id": plumber_id})

        logger.info("Sample data initialized with jobs, services, and sellers")
        return True
