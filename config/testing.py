import os

from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("TEST_DB_NAME", "school_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

# Tests drive the sweep explicitly and never send mail
SCHEDULER_ENABLED = False
SMTP_HOST = ""

TIMEZONE = "Asia/Kolkata"
WEEKLY_OFF_DAY = 6
SCHOOL_LATITUDE = 22.8171
SCHOOL_LONGITUDE = 72.4733
ATTENDANCE_RADIUS_KM = 3.0
