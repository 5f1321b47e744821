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

from club_hive.core.logging import configure_logging
from club_hive.database.bootstrap import SEED_PATH, apply_seed_sql, ensure_admin
from club_hive.database.connection import DBConfig

logger = logging.getLogger("club_hive.scripts.seed_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=SEED_PATH)

    email = getattr(settings, "ADMIN_EMAIL", "")
    password = getattr(settings, "ADMIN_PASSWORD", "")
    if not email or not password:
        logger.error("Set ADMIN_EMAIL and ADMIN_PASSWORD to create the admin account")
        sys.exit(1)
    ensure_admin(db_config, name=getattr(settings, "ADMIN_NAME", "Site Admin"), email=email, password=password)

    logger.info("Seeded database -> %s", DBConfig.from_dict(db_config).describe())


if __name__ == "__main__":
    main()
