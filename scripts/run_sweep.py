"""Run the attendance compliance sweep once, outside the scheduler.

Usage: python scripts/run_sweep.py [--force]
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_attendance.school_attendance.common.logging_setup import configure_logging
from src.school_attendance.school_attendance.main import container_from_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Auto-mark teachers who missed the attendance deadline.")
    parser.add_argument("--force", action="store_true", help="ignore the deadline, weekend and holiday gates")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = container_from_settings(settings)
    report = container.sweeper.run(force=args.force)
    print(json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
