"""
Deliver appointment confirmations that are still pending or previously failed.

Usage: python dispatch_notifications.py [--limit 100]
"""

import argparse
import logging
import sys
from hospital_api.config.database import SessionLocal, settings
from hospital_api.services.notification_service import NotificationService
import hospital_api.models  # noqa: F401

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger("dispatch_notifications")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--limit", type=int, default=100, help="Maximum messages to deliver in one run")
    args = parser.parse_args()

    if not settings.smtp_host:
        logger.error("SMTP_HOST is not configured; nothing can be delivered.")
        return 1

    db = SessionLocal()
    try:
        summary = NotificationService.dispatch_pending(db, limit=args.limit)
    finally:
        db.close()

    logger.info(f"✓ Sent {summary['sent']} notification(s), {summary['failed']} failed")
    return 0 if summary["failed"] == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
