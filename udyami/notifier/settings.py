"""Timing settings for the notification engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

# Fire only while elapsed time is within one poll interval after the threshold
REMINDER_MODE_WINDOW = "window"
# Fire on the first poll at or after the threshold, however late
REMINDER_MODE_CATCH_UP = "catch_up"
REMINDER_MODES = (REMINDER_MODE_WINDOW, REMINDER_MODE_CATCH_UP)


@dataclass(frozen=True)
class NotificationSettings:
    """Delays and intervals used by the job-matching and reminder triggers."""

    seller_match_delay: float = 2.0
    reminder_poll_interval: float = 60.0
    reminder_after: timedelta = timedelta(hours=24)
    reminder_mode: str = REMINDER_MODE_CATCH_UP

    def __post_init__(self):
        if self.seller_match_delay < 0:
            raise ValueError("seller_match_delay must not be negative")
        if self.reminder_poll_interval <= 0:
            raise ValueError("reminder_poll_interval must be positive")
        if self.reminder_after <= timedelta(0):
            raise ValueError("reminder_after must be positive")
        if self.reminder_mode not in REMINDER_MODES:
            raise ValueError(f"Invalid reminder mode. Must be one of: {', '.join(REMINDER_MODES)}")

    @property
    def reminder_window(self) -> timedelta:
        return timedelta(seconds=self.reminder_poll_interval)

    @classmethod
    def from_config(cls, config) -> NotificationSettings:
        """Build settings from a Config class or object."""
        return cls(
            seller_match_delay=config.SELLER_MATCH_DELAY_SECONDS,
            reminder_poll_interval=config.REMINDER_POLL_INTERVAL_SECONDS,
            reminder_after=timedelta(hours=config.REMINDER_AFTER_HOURS),
            reminder_mode=config.REMINDER_MODE,
        )
