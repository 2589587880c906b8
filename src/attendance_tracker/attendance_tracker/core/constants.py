"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_DAYS = 7
MIN_PASSWORD_LENGTH = 8
LOW_ATTENDANCE_THRESHOLD = 75

# Same-day classes become markable from this local hour onwards.
MARKING_OPENS_AT_HOUR = 16

CLASS_DATE_FORMAT = "%d-%m-%Y"

UNKNOWN_SUBJECT = "Unknown Subject"
UNKNOWN_TIME_SLOT = "Unknown Time"

# Column widths in database/schema.sql.
NAME_MAX_LENGTH = 100
TIME_SLOT_KEY_MAX_LENGTH = 32
TIME_SLOT_MAX_LENGTH = 64
SUBJECT_MAX_LENGTH = 128
