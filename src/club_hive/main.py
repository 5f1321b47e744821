from __future__ import annotations

import importlib
import logging
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask, current_app

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .clubs.controller import register as register_clubs
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import REMINDER_LOOKAHEAD_HOURS
from .core.logging import configure_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin, list_tables
from .database.connection import DBConfig
from .events.controller import register as register_events
from .notifications.controller import register as register_notifications
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _prepare_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config)
        admin_email = getattr(settings, "ADMIN_EMAIL", "")
        admin_password = getattr(settings, "ADMIN_PASSWORD", "")
        if admin_email and admin_password:
            ensure_admin(
                db_config,
                name=getattr(settings, "ADMIN_NAME", "Site Admin"),
                email=admin_email,
                password=admin_password,
            )
        else:
            logger.warning("ADMIN_EMAIL/ADMIN_PASSWORD not set; skipping admin account")


def create_app(settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    """Application factory.

    ``container`` lets tests run the HTTP layer over in-memory repositories;
    the database is only touched when it is omitted.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())
        _prepare_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            reminder_lookahead_hours=int(getattr(settings, "REMINDER_LOOKAHEAD_HOURS", REMINDER_LOOKAHEAD_HOURS)),
        )

    app.extensions["club_hive"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_clubs(app, container)
    register_events(app, container)
    register_attendance(app, container)
    register_announcements(app, container)
    register_notifications(app, container)
    register_analytics(app, container)

    @app.cli.command("send-reminders")
    def send_reminders_command():
        """Create event_reminder notifications for events in the lookahead window."""
        sent = current_app.extensions["club_hive"].reminder_service.send_event_reminders()
        click.echo(f"Sent {sent} event reminders")

    return app
