import os

from config.config import *  # noqa: F401,F403

SECRET_KEY = os.environ["SECRET_KEY"]

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Schema changes are applied with scripts/init_db.py, never on boot
AUTO_INIT_DB = False
AUTO_SEED_DB = False
