"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

POLICY_KEY = "default_config"

# Self-service cutoffs (not policy-configurable).
PRESENT_CUTOFF = time(11, 0)
HALF_DAY_CUTOFF = time(14, 30)

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_WEEKLY_OFF_DAY = 6  # date.weekday(): Sunday
DEFAULT_YEARLY_LEAVE_LIMIT = 12

SWEEP_DELAY_MINUTES = 5
DEFAULT_SWEEP_BASE_TIMEOUT_SECONDS = 30.0
DEFAULT_SWEEP_PER_TEACHER_TIMEOUT_SECONDS = 2.0

PASS_PERCENTAGE = 33.0
UPLOADS_FOR_FULL_CREDIT = 50
RECENT_UPLOAD_DAYS = 30
ACADEMIC_YEAR_START_MONTH = 4

DEFAULT_UPCOMING_HOLIDAYS = 5
DEFAULT_LEADERBOARD_LIMIT = 10
MAX_LISTING_DAYS = 366
