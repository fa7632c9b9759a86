"""
Notification Service

In-process notifications for buyers and sellers: job matching, buyer
reminders, read/dismiss state and live subscriptions.
"""

from .notification_service import NotificationService
from .seller_roster import DEFAULT_SELLER_ROSTER
from .settings import NotificationSettings

__all__ = ["NotificationService", "NotificationSettings", "DEFAULT_SELLER_ROSTER"]
