import os


def _env_bool(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str):
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return float(value)


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "school-attendance-secret"

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "school_attendance")

    # Dev helpers
    AUTO_INIT_DB = _env_bool("AUTO_INIT_DB")
    AUTO_SEED_DB = _env_bool("AUTO_SEED_DB")

    # Operational clock; WEEKLY_OFF_DAY uses date.weekday() (0=Monday ... 6=Sunday)
    TIMEZONE = os.environ.get("TIMEZONE", "Asia/Kolkata")
    WEEKLY_OFF_DAY = int(os.environ.get("WEEKLY_OFF_DAY", "6"))

    # Geofence; self-marking is rejected until all three are set
    SCHOOL_LATITUDE = _env_float("SCHOOL_LATITUDE")
    SCHOOL_LONGITUDE = _env_float("SCHOOL_LONGITUDE")
    ATTENDANCE_RADIUS_KM = _env_float("ATTENDANCE_RADIUS_KM")

    # Mail
    SMTP_HOST = os.environ.get("SMTP_HOST", "")
    SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))
    SMTP_USER = os.environ.get("SMTP_USER", "")
    SMTP_PASSWORD = os.environ.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = _env_bool("SMTP_USE_TLS", "1")
    MAIL_FROM = os.environ.get("MAIL_FROM", SMTP_USER)

    # Sweep
    SCHEDULER_ENABLED = _env_bool("SCHEDULER_ENABLED", "1")
    SWEEP_BASE_TIMEOUT_SECONDS = float(os.environ.get("SWEEP_BASE_TIMEOUT_SECONDS", "30"))
    SWEEP_PER_TEACHER_TIMEOUT_SECONDS = float(os.environ.get("SWEEP_PER_TEACHER_TIMEOUT_SECONDS", "2"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

DEBUG = _env_bool("DEBUG")

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB

TIMEZONE = Config.TIMEZONE
WEEKLY_OFF_DAY = Config.WEEKLY_OFF_DAY

SCHOOL_LATITUDE = Config.SCHOOL_LATITUDE
SCHOOL_LONGITUDE = Config.SCHOOL_LONGITUDE
ATTENDANCE_RADIUS_KM = Config.ATTENDANCE_RADIUS_KM

SMTP_HOST = Config.SMTP_HOST
SMTP_PORT = Config.SMTP_PORT
SMTP_USER = Config.SMTP_USER
SMTP_PASSWORD = Config.SMTP_PASSWORD
SMTP_USE_TLS = Config.SMTP_USE_TLS
MAIL_FROM = Config.MAIL_FROM

SCHEDULER_ENABLED = Config.SCHEDULER_ENABLED
SWEEP_BASE_TIMEOUT_SECONDS = Config.SWEEP_BASE_TIMEOUT_SECONDS
SWEEP_PER_TEACHER_TIMEOUT_SECONDS = Config.SWEEP_PER_TEACHER_TIMEOUT_SECONDS

LOG_LEVEL = Config.LOG_LEVEL
