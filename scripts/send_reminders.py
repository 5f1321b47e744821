"""Run one reminder sweep; meant to be called from cron or another scheduler."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from club_hive.container import build_container
from club_hive.core.constants import REMINDER_LOOKAHEAD_HOURS
from club_hive.core.logging import configure_logging

logger = logging.getLogger("club_hive.scripts.send_reminders")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        reminder_lookahead_hours=int(getattr(settings, "REMINDER_LOOKAHEAD_HOURS", REMINDER_LOOKAHEAD_HOURS)),
    )
    sent = container.reminder_service.send_event_reminders()
    logger.info("Sent %d event reminders", sent)


if __name__ == "__main__":
    main()
