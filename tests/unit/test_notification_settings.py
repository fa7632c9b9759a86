"""Unit tests for NotificationSettings."""

from datetime import timedelta
from types import SimpleNamespace

import pytest

from udyami.notifier import NotificationSettings


class TestNotificationSettings:
    """Tests for NotificationSettings validation."""

    def test_defaults(self):
        settings = NotificationSettings()
        assert settings.reminder_after == timedelta(hours=24)
        assert settings.reminder_window == timedelta(seconds=60)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"seller_match_delay": -1},
            {"reminder_poll_interval": 0},
            {"reminder_after": timedelta(0)},
            {"reminder_mode": "eventually"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            NotificationSettings(**kwargs)

    def test_from_config(self):
        config = SimpleNamespace(
            SELLER_MATCH_DELAY_SECONDS=1.5,
            REMINDER_POLL_INTERVAL_SECONDS=30,
            REMINDER_AFTER_HOURS=0.5,
            REMINDER_MODE="window",
        )

        settings = NotificationSettings.from_config(config)

        assert settings.reminder_after == timedelta(minutes=30)
        assert settings.reminder_window == timedelta(seconds=30)
