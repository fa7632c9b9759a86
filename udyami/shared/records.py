"""
Record types shared by the notification engine and the persistence layer.

Jobs and sellers arrive from screens, the backend API and local storage in
slightly different shapes (``buyerId`` vs ``buyer_id``, a combined ``budget``
string vs ``budget_min``/``budget_max``, epoch milliseconds vs ISO
timestamps). ``from_dict`` normalizes all of them so the core only ever sees
one shape.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

NOTIFICATION_SELLER_JOB = "seller_job"
NOTIFICATION_BUYER_REMINDER = "buyer_reminder"
NOTIFICATION_BUYER_FOLLOWUP = "buyer_followup"
NOTIFICATION_TYPES = (
    NOTIFICATION_SELLER_JOB,
    NOTIFICATION_BUYER_REMINDER,
    NOTIFICATION_BUYER_FOLLOWUP,
)

JOB_STATUS_OPEN = "open"
JOB_STATUSES = ("open", "in_progress", "completed", "cancelled")

# Epoch values above this are milliseconds (year 5138 in seconds)
_EPOCH_MILLIS_THRESHOLD = 100_000_000_000

_NUMBER_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?")


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a timestamp in any of the shapes the app produces.

    Args:
        value: datetime, epoch seconds or milliseconds, or ISO 8601 string

    Returns:
        Timezone-aware UTC datetime, or None if the value is empty or unparseable
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) >= _EPOCH_MILLIS_THRESHOLD else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def parse_budget(budget: Any) -> tuple[float | None, float | None]:
    """
    Split a combined budget string such as ``"₹1,000 - ₹2,500"`` into bounds.

    Args:
        budget: Budget string or number

    Returns:
        Tuple of (budget_min, budget_max); missing bounds are None
    """
    if budget is None:
        return None, None
    if isinstance(budget, (int, float)) and not isinstance(budget, bool):
        return float(budget), float(budget)
    numbers = [float(n.replace(",", "")) for n in _NUMBER_PATTERN.findall(str(budget))]
    if not numbers:
        return None, None
    if len(numbers) == 1:
        return numbers[0], None
    return numbers[0], numbers[1]


def _to_number(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _first(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass
class JobRecord:
    """A posted job as seen by the notification engine."""

    id: str | int | None
    title: str = ""
    description: str = ""
    skill: str = ""
    budget_min: float | None = None
    budget_max: float | None = None
    timeline: str = ""
    location: str = ""
    buyer_id: str | int | None = None
    status: str = JOB_STATUS_OPEN
    posted_at: datetime | None = None
    applicants: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobRecord:
        """
        Build a JobRecord from any of the job shapes used across the app.

        Args:
            data: Job dictionary (snake_case, camelCase or legacy persisted form)

        Returns:
            Normalized JobRecord
        """
        budget_min = _to_number(_first(data, "budget_min", "budgetMin"))
        budget_max = _to_number(_first(data, "budget_max", "budgetMax"))
        if budget_min is None and budget_max is None and "budget" in data:
            budget_min, budget_max = parse_budget(data["budget"])

        applicants = data.get("applicants", 0)
        if isinstance(applicants, (list, tuple)):
            applicants = len(applicants)

        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            description=data.get("description") or "",
            skill=data.get("skill") or "",
            budget_min=budget_min,
            budget_max=budget_max,
            timeline=data.get("timeline") or "",
            location=data.get("location") or "",
            buyer_id=_first(data, "buyer_id", "buyerId"),
            status=data.get("status") or JOB_STATUS_OPEN,
            posted_at=parse_timestamp(_first(data, "posted_at", "postedAt")),
            applicants=int(applicants or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "skill": self.skill,
            "budget_min": self.budget_min,
            "budget_max": self.budget_max,
            "timeline": self.timeline,
            "location": self.location,
            "buyer_id": self.buyer_id,
            "status": self.status,
            "posted_at": self.posted_at.isoformat() if self.posted_at else None,
            "applicants": self.applicants,
        }

    def snapshot(self) -> JobRecord:
        """Return an independent copy to attach to a notification."""
        return replace(self)


@dataclass(frozen=True)
class SellerRecord:
    """A seller as used for job matching."""

    id: str | int
    name: str
    skills: frozenset[str] = field(default_factory=frozenset)
    location: str = ""
    phone: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SellerRecord:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            skills=frozenset(data.get("skills") or ()),
            location=data.get("location") or "",
            phone=_first(data, "phone", "phone_number", "phoneNumber", default=""),
        )

    def matches(self, job: JobRecord) -> bool:
        """Exact, case-sensitive skill and location match."""
        return job.skill in self.skills and self.location == job.location


@dataclass
class NotificationRecord:
    """An in-app notification shown to a buyer or seller."""

    id: str
    type: str
    title: str
    message: str
    timestamp: datetime
    job_data: JobRecord | None = None
    read: bool = False
    dismissed: bool = False

    def __post_init__(self):
        if self.type not in NOTIFICATION_TYPES:
            raise ValueError(
                f"Invalid notification type. Must be one of: {', '.join(NOTIFICATION_TYPES)}"
            )

    @property
    def is_active(self) -> bool:
        return not self.read and not self.dismissed

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "job_data": self.job_data.to_dict() if self.job_data else None,
            "timestamp": self.timestamp.isoformat(),
            "read": self.read,
            "dismissed": self.dismissed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NotificationRecord:
        """
        Rebuild a notification from its stored form.

        Raises:
            ValueError: If required fields are missing or invalid
        """
        timestamp = parse_timestamp(data.get("timestamp"))
        if not data.get("id") or timestamp is None:
            raise ValueError("Notification requires an id and a timestamp")
        job_data = _first(data, "job_data", "jobData")
        return cls(
            id=str(data["id"]),
            type=data.get("type", ""),
            title=data.get("title") or "",
            message=data.get("message") or "",
            timestamp=timestamp,
            job_data=JobRecord.from_dict(job_data) if isinstance(job_data, dict) else None,
            read=bool(data.get("read", False)),
            dismissed=bool(data.get("dismissed", False)),
        )
