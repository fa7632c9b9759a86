#!/usr/bin/env python3
"""
Walk through the notification flow from the command line.

Posts a demo job (Plumbing in Delhi by default), waits for seller matching,
then prints the notifications and the unread count.

Usage:
    python scripts/notification_demo.py [--skill Plumbing] [--location Delhi] [--clear]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add repo root to path
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

from udyami.app import build_services
from udyami.config import Config
from udyami.shared.structured_logging import configure_logging


async def run_demo(skill: str, location: str, clear: bool) -> None:
    services = build_services()
    services.database.initialize()
    notifications = services.notifications
    notifications.start()

    if clear:
        notifications.clear_all()

    def on_change(current):
        latest = notifications.get_latest_unread()
        if latest is not None:
            print(f"\n[NEW] {latest.title}\n      {latest.message}")

    unsubscribe = notifications.subscribe(on_change)

    job_data = {
        "title": f"Test Job for {skill}",
        "description": f"Need help with {skill.lower()} work",
        "skill": skill,
        "budget_min": 1000,
        "budget_max": 3000,
        "timeline": "2 days",
        "location": location,
        "buyer_id": 103,
    }
    job_id, job = services.post_job(job_data)
    print(f"Posted job {job.id} (stored as {job_id} in {services.database.get_database_status()})")

    await asyncio.sleep(notifications.settings.seller_match_delay + 0.5)
    unsubscribe()
    notifications.stop()

    print("\n" + "=" * 70)
    print(f"Notifications ({notifications.get_unread_count()} unread)")
    print("=" * 70)
    for notification in notifications.get_notifications():
        flags = []
        if notification.read:
            flags.append("read")
        if notification.dismissed:
            flags.append("dismissed")
        print(f"- {notification.id} [{notification.type}] {notification.title} {' '.join(flags)}")


def main():
    parser = argparse.ArgumentParser(description="Trigger seller notifications for a demo job")
    parser.add_argument("--skill", default="Plumbing", help="Job skill (exact match)")
    parser.add_argument("--location", default="Delhi", help="Job location (exact match)")
    parser.add_argument("--clear", action="store_true", help="Clear notifications first")
    parser.add_argument("--log-level", default=Config.LOG_LEVEL, help="Log level")
    args = parser.parse_args()

    configure_logging(args.log_level)
    asyncio.run(run_demo(args.skill, args.location, args.clear))


if __name__ == "__main__":
    main()
