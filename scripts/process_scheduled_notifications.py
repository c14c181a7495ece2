"""Deliver scheduled notifications whose time has come.

Meant to be run by an external scheduler (cron, a cloud function, or by hand).
"""

from __future__ import annotations

import argparse
import logging

from campusnet.application.use_cases.notifications import process_scheduled_notifications
from campusnet.infrastructure.database import SessionLocal, initialize_database
from campusnet.infrastructure.key_value import KeyValueStoreError, SqlAlchemyKeyValueStore
from campusnet.infrastructure.repositories import NotificationStore
from campusnet.utils import parse_iso_datetime

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the delivery sweep."""

    parser = argparse.ArgumentParser(
        description="Deliver pending scheduled notifications for CampusNet.",
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Reference time in ISO-8601 (default: current time in APP_TIMEZONE)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every delivered notification.",
    )
    return parser.parse_args()


def main() -> None:
    """Run one sweep against the configured database."""

    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        now = parse_iso_datetime(args.now)
    except ValueError as exc:
        raise SystemExit(f"Invalid --now value: {exc}") from exc

    initialize_database()
    store = NotificationStore(SqlAlchemyKeyValueStore(SessionLocal))
    try:
        delivered = process_scheduled_notifications(store, now=now)
    except KeyValueStoreError as exc:
        raise SystemExit(f"Scheduled delivery failed: {exc}") from exc

    for notification in delivered:
        logger.debug("Delivered %s to %s", notification.id, notification.user_id)
    print(f"Delivered {len(delivered)} scheduled notification(s).")


if __name__ == "__main__":
    main()
