"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
PERIOD_FORMAT = "%Y-%m"

DEFAULT_STAFF_CODE_PREFIX = "STF"
STAFF_CODE_DIGITS = 5

DEFAULT_JOB_LIST_LIMIT = 50
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024

MIN_REPORT_YEAR = 2020
MAX_REPORT_YEAR = 2100
