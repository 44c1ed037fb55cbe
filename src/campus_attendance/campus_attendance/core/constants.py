"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_HOURS = 24
DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 100
MIN_PASSWORD_LENGTH = 6

DAYS_OF_WEEK = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

# Column widths in database/schema.sql
MAX_ID_LENGTH = 32
MAX_NAME_LENGTH = 120
MAX_EMAIL_LENGTH = 255
MAX_LABEL_LENGTH = 120
MAX_REASON_LENGTH = 2000

APP_EXTENSION_KEY = "campus_attendance"
