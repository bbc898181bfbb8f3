"""Create the database and apply database/schema.sql.

Usage: python scripts/init_db.py [--seed]
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_attendance.school_attendance.common.logging_setup import configure_logging
from src.school_attendance.school_attendance.database.bootstrap import apply_schema, apply_seed_sql, missing_tables

logger = logging.getLogger("init_db")


def main() -> int:
    parser = argparse.ArgumentParser(description="Apply the attendance schema to the configured MySQL database.")
    parser.add_argument("--seed", action="store_true", help="also load database/seed.sql demo data")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    if args.seed:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    missing = missing_tables(db_config)
    if missing:
        logger.error("Schema incomplete in %s, missing: %s", db_config.get("database"), ", ".join(missing))
        return 1

    logger.info("Schema ready in %s@%s/%s", db_config.get("user"), db_config.get("host"), db_config.get("database"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
