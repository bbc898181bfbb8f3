import os

from config.config import *  # noqa: F401,F403
from config.config import _env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Local MySQL is usually empty on first run
AUTO_INIT_DB = _env_bool("AUTO_INIT_DB", "1")

# Demo campus so self-marking works without extra env vars
SCHOOL_LATITUDE = SCHOOL_LATITUDE if SCHOOL_LATITUDE is not None else 22.8171  # noqa: F405
SCHOOL_LONGITUDE = SCHOOL_LONGITUDE if SCHOOL_LONGITUDE is not None else 72.4733  # noqa: F405
ATTENDANCE_RADIUS_KM = ATTENDANCE_RADIUS_KM if ATTENDANCE_RADIUS_KM is not None else 3.0  # noqa: F405
