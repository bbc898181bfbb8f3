from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.logging_setup import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, missing_tables
from .geo.verifier import Geofence
from .notifications.smtp_sink import SmtpSettings
from .attendance.controller import register as register_attendance
from .compliance.controller import register as register_compliance
from .holidays.controller import register as register_holidays
from .performance.controller import register as register_performance
from .policy.controller import register as register_policy

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def container_from_settings(settings) -> Container:
    smtp = SmtpSettings(
        host=getattr(settings, "SMTP_HOST", None),
        port=int(getattr(settings, "SMTP_PORT", 587)),
        user=getattr(settings, "SMTP_USER", None),
        password=getattr(settings, "SMTP_PASSWORD", None),
        use_tls=bool(getattr(settings, "SMTP_USE_TLS", True)),
        mail_from=getattr(settings, "MAIL_FROM", None),
    )
    geofence = Geofence(
        latitude=getattr(settings, "SCHOOL_LATITUDE", None),
        longitude=getattr(settings, "SCHOOL_LONGITUDE", None),
        radius_km=getattr(settings, "ATTENDANCE_RADIUS_KM", None),
    )
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        timezone=getattr(settings, "TIMEZONE"),
        weekly_off_day=int(getattr(settings, "WEEKLY_OFF_DAY")),
        geofence=geofence,
        smtp=smtp,
        sweep_base_timeout_seconds=float(getattr(settings, "SWEEP_BASE_TIMEOUT_SECONDS")),
        sweep_per_teacher_timeout_seconds=float(getattr(settings, "SWEEP_PER_TEACHER_TIMEOUT_SECONDS")),
    )


def register_all(app: Flask, container: Container) -> None:
    register_attendance(app, container)
    register_compliance(app, container)
    register_policy(app, container)
    register_holidays(app, container)
    register_performance(app, container)

    @app.errorhandler(500)
    def server_error(_e):
        return jsonify({"success": False, "message": "Server error"}), 500


def create_app(*, container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            missing = missing_tables(db_config)
            if missing:
                raise RuntimeError(f"Schema incomplete, missing tables: {', '.join(missing)}")
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        container = container_from_settings(settings)

    register_all(app, container)

    if bool(getattr(settings, "SCHEDULER_ENABLED", False)):
        scheduler = container.sweep_scheduler
        scheduler.start(container.policy_service.get().deadline_time)
        atexit.register(scheduler.shutdown)

    return app
