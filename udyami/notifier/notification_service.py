"""
Notification Service

In-process notification engine for buyers and sellers. Notifications are
produced by two triggers:

- job matching: a newly posted job notifies every seller whose skills
  include the job's skill and whose location equals the job's location,
  shortly after the job is posted;
- buyer reminders: a periodic poll reminds the buyer once a posted job has
  been open for the reminder threshold (24 hours by default).

The list is kept most-recent-first, broadcast in full to subscribers after
every change and persisted to the ``notifications`` collection of the local
store.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from ..local_store import LocalDatabase
from ..local_store.local_database import NOTIFICATIONS
from ..shared.records import (
    JOB_STATUS_OPEN,
    NOTIFICATION_BUYER_FOLLOWUP,
    NOTIFICATION_BUYER_REMINDER,
    NOTIFICATION_SELLER_JOB,
    JobRecord,
    NotificationRecord,
    SellerRecord,
    utc_now,
)
from ..shared.structured_logging import get_structured_logger
from .seller_roster import DEFAULT_SELLER_ROSTER
from .settings import REMINDER_MODE_WINDOW, NotificationSettings

logger = logging.getLogger(__name__)

Listener = Callable[[list[NotificationRecord]], None]

USER_TYPE_BUYER = "buyer"
USER_TYPE_SELLER = "seller"

_USER_NOTIFICATION_TYPES = {
    USER_TYPE_SELLER: (NOTIFICATION_SELLER_JOB,),
    USER_TYPE_BUYER: (NOTIFICATION_BUYER_REMINDER, NOTIFICATION_BUYER_FOLLOWUP),
}


def seller_job_notification_id(job_id: Any, seller_id: Any) -> str:
    return f"seller_job_{job_id}_{seller_id}"


def buyer_reminder_notification_id(job_id: Any) -> str:
    return f"buyer_reminder_{job_id}"


def _parse_row(data: dict[str, Any]) -> NotificationRecord | None:
    """Parse a stored row, or return None if it is not an engine notification."""
    try:
        return NotificationRecord.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        logger.debug(f"Stored notification {data.get('id')} is not an engine notification: {e}")
        return None


def _format_duration(duration: timedelta) -> str:
    hours = duration.total_seconds() / 3600
    if hours.is_integer():
        return f"{int(hours)} hours"
    return f"{hours:.1f} hours"


class NotificationService:
    """
    Notification engine with job-matching and reminder triggers.

    The service runs on a single asyncio event loop: ``start()`` begins the
    reminder poll and ``stop()`` cancels it together with any pending job
    matches. All mutations are synchronous, so each one and its broadcast
    complete before another coroutine runs.
    """

    def __init__(
        self,
        local_db: LocalDatabase,
        sellers: Iterable[SellerRecord | Mapping[str, Any]] | None = None,
        settings: NotificationSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize the notification service.

        Args:
            local_db: Local store used to persist the notification list
            sellers: Sellers considered for job matching (default: demo roster)
            settings: Delays and intervals (default: NotificationSettings())
            clock: Returns the current UTC time (default: utc_now)
        """
        if not local_db:
            raise ValueError("LocalDatabase is required")

        self.local_db = local_db
        self.settings = settings or NotificationSettings()
        self._clock = clock or utc_now
        self.sellers: list[SellerRecord] = [
            s if isinstance(s, SellerRecord) else SellerRecord.from_dict(s)
            for s in (DEFAULT_SELLER_ROSTER if sellers is None else sellers)
        ]

        self._notifications: list[NotificationRecord] = []
        self._listeners: list[Listener] = []
        self._jobs: list[JobRecord] = []
        self._reminded_job_ids: set[str] = set()

        self._poll_task: asyncio.Task | None = None
        self._pending_matches: set[asyncio.Task] = set()

        self.load()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> list[NotificationRecord]:
        """
        Replace the in-memory list with the persisted one.

        Called by the constructor. Rows that are not engine notifications
        (for example those written by LocalDatabase.create_notification) are
        left out of the list and kept in storage by every later save.

        Returns:
            The loaded notifications
        """
        notifications = [
            notification
            for notification in map(_parse_row, self.local_db.read_collection(NOTIFICATIONS))
            if notification is not None
        ]

        self._notifications = notifications
        for notification in notifications:
            if notification.type == NOTIFICATION_BUYER_REMINDER and notification.job_data:
                self._reminded_job_ids.add(str(notification.job_data.id))
        logger.info(f"Loaded {len(notifications)} notification(s)")
        return self.get_notifications()

    def start(self) -> None:
        """
        Start the reminder poll.

        Must be called from a running event loop. Calling it again while the
        poll is running does nothing.
        """
        if self.is_running:
            return
        loop = asyncio.get_running_loop()
        self._poll_task = loop.create_task(self._poll_reminders())
        logger.info(
            f"Notification service started (poll every {self.settings.reminder_poll_interval}s)"
        )

    def stop(self) -> None:
        """Cancel the reminder poll and any job matches still waiting to run."""
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None
        for task in list(self._pending_matches):
            task.cancel()
        self._pending_matches.clear()
        logger.info("Notification service stopped")

    @property
    def is_running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    async def _poll_reminders(self) -> None:
        while True:
            await asyncio.sleep(self.settings.reminder_poll_interval)
            try:
                self.check_buyer_reminders()
            except Exception as e:
                logger.error(f"Reminder poll failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the full list after every change.

        Args:
            listener: Callable receiving a list of NotificationRecord

        Returns:
            Function that unregisters this listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self._listeners = [
                registered for registered in self._listeners if registered is not listener
            ]

        return unsubscribe

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.get_notifications())
            except Exception as e:
                logger.error(f"Notification listener failed: {e}", exc_info=True)

    def _save(self) -> None:
        records = [notification.to_dict() for notification in self._notifications]
        # Rows owned by other writers of the collection are carried over
        records.extend(
            data
            for data in self.local_db.read_collection(NOTIFICATIONS)
            if _parse_row(data) is None
        )
        if not self.local_db.write_collection(NOTIFICATIONS, records):
            logger.warning("Notifications kept in memory only: saving failed")

    def _commit(self) -> None:
        """Broadcast the current list, then persist it."""
        self._notify_listeners()
        self._save()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_notifications(self) -> list[NotificationRecord]:
        return list(self._notifications)

    def get_unread_count(self) -> int:
        return sum(1 for n in self._notifications if n.is_active)

    def get_latest_unread(self) -> NotificationRecord | None:
        """Return the most recent notification that is neither read nor dismissed."""
        return next((n for n in self._notifications if n.is_active), None)

    def get_notifications_for_user(self, user_type: str) -> list[NotificationRecord]:
        """
        Get the non-dismissed notifications addressed to a kind of user.

        Args:
            user_type: "buyer" or "seller"

        Returns:
            Matching notifications, most recent first
        """
        if user_type not in _USER_NOTIFICATION_TYPES:
            raise ValueError(f"Invalid user type: {user_type}")
        types = _USER_NOTIFICATION_TYPES[user_type]
        return [n for n in self._notifications if not n.dismissed and n.type in types]

    def get_jobs(self) -> list[JobRecord]:
        """Jobs posted through simulate_post_job during this session."""
        return list(self._jobs)

    def _find(self, notification_id: str) -> NotificationRecord | None:
        return next((n for n in self._notifications if n.id == notification_id), None)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def mark_as_read(self, notification_id: str) -> bool:
        """
        Mark a notification as read.

        Returns:
            True if the notification exists, False otherwise
        """
        notification = self._find(notification_id)
        if notification is None:
            return False
        notification.read = True
        self._commit()
        return True

    def dismiss_notification(self, notification_id: str) -> bool:
        """
        Dismiss a notification. It stays stored until clear_all().

        Returns:
            True if the notification exists, False otherwise
        """
        notification = self._find(notification_id)
        if notification is None:
            return False
        notification.dismissed = True
        self._commit()
        return True

    def clear_all(self) -> None:
        """Remove every notification."""
        self._notifications = []
        self._commit()
        logger.info("All notifications cleared")

    # ------------------------------------------------------------------
    # Job matching trigger
    # ------------------------------------------------------------------

    def simulate_post_job(self, job_data: JobRecord | Mapping[str, Any]) -> JobRecord:
        """
        Register a newly posted job and schedule seller matching.

        The job is kept in this service's in-memory job list only; durable
        storage is the caller's job. Matching runs after
        ``settings.seller_match_delay`` seconds on the running event loop, or
        immediately when no loop is running.

        Args:
            job_data: Job fields; an existing ``id`` is kept

        Returns:
            The registered job

        Raises:
            ValueError: If job_data is not a job or has no skill
        """
        if isinstance(job_data, JobRecord):
            job = replace(job_data)
        elif isinstance(job_data, Mapping):
            job = JobRecord.from_dict(dict(job_data))
        else:
            raise ValueError("Job data must be a mapping or JobRecord")
        if not job.skill:
            raise ValueError("Job skill is required")

        if job.id is None or job.id == "":
            job.id = uuid.uuid4().hex
        job.posted_at = self._clock()
        job.status = JOB_STATUS_OPEN
        job.applicants = 0

        self._jobs = [j for j in self._jobs if j.id != job.id]
        self._jobs.append(job)
        get_structured_logger(__name__, job_id=job.id).info(
            f"Job posted: {job.skill} in {job.location}"
        )

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; matching sellers immediately")
            self.notify_matching_sellers(job)
            return job

        task = loop.create_task(self._match_after_delay(job))
        self._pending_matches.add(task)
        task.add_done_callback(self._pending_matches.discard)
        return job

    async def _match_after_delay(self, job: JobRecord) -> None:
        await asyncio.sleep(self.settings.seller_match_delay)
        try:
            self.notify_matching_sellers(job)
        except Exception as e:
            logger.error(f"Seller matching failed for job {job.id}: {e}", exc_info=True)

    def find_matching_sellers(self, job: JobRecord) -> list[SellerRecord]:
        """Sellers with the job's skill in exactly the job's location."""
        return [seller for seller in self.sellers if seller.matches(job)]

    def notify_matching_sellers(self, job: JobRecord) -> list[NotificationRecord]:
        """
        Create one seller_job notification per matching seller.

        A (job, seller) pair that already has a notification is skipped.

        Returns:
            The notifications created by this call
        """
        log = get_structured_logger(__name__, job_id=job.id)
        matches = self.find_matching_sellers(job)
        if not matches:
            log.info(f"No sellers match {job.skill} in {job.location}")
            return []

        created = []
        for seller in matches:
            notification_id = seller_job_notification_id(job.id, seller.id)
            if self._find(notification_id) is not None:
                log.debug(f"Seller {seller.id} already notified")
                continue
            notification = NotificationRecord(
                id=notification_id,
                type=NOTIFICATION_SELLER_JOB,
                title=f"New job for {job.skill} in your area!",
                message=f"A buyer in {job.location} is looking for {job.skill} work.",
                timestamp=self._clock(),
                job_data=job.snapshot(),
            )
            self._notifications.insert(0, notification)
            created.append(notification)

        if created:
            self._commit()
            log.info(f"Notified {len(created)} seller(s)")
        return created

    # ------------------------------------------------------------------
    # Buyer reminder trigger
    # ------------------------------------------------------------------

    def _reminder_due(self, job: JobRecord, now: datetime) -> bool:
        if job.posted_at is None or job.status != JOB_STATUS_OPEN:
            return False
        elapsed = now - job.posted_at
        if elapsed < self.settings.reminder_after:
            return False
        if self.settings.reminder_mode == REMINDER_MODE_WINDOW:
            return elapsed < self.settings.reminder_after + self.settings.reminder_window
        return True

    def check_buyer_reminders(self, now: datetime | None = None) -> list[NotificationRecord]:
        """
        Run one reminder poll over the in-memory jobs.

        Each job gets at most one buyer_reminder, even after clear_all().

        Args:
            now: Poll time (default: the service clock)

        Returns:
            The reminders created by this poll
        """
        now = now or self._clock()
        created = []
        for job in list(self._jobs):
            reminder_id = buyer_reminder_notification_id(job.id)
            if str(job.id) in self._reminded_job_ids or self._find(reminder_id) is not None:
                continue
            if not self._reminder_due(job, now):
                continue

            notification = NotificationRecord(
                id=reminder_id,
                type=NOTIFICATION_BUYER_REMINDER,
                title="Did you get an Udyami to fulfil your task?",
                message=(
                    f"It's been {_format_duration(self.settings.reminder_after)} since you "
                    f'posted "{job.title}". Check if you found someone for the job.'
                ),
                timestamp=now,
                job_data=job.snapshot(),
            )
            self._notifications.insert(0, notification)
            self._reminded_job_ids.add(str(job.id))
            created.append(notification)
            self._commit()
            get_structured_logger(__name__, job_id=job.id).info("Buyer reminder created")
        return created
