"""Constants and defaults.

Sheet titles and column contracts live in ``sheets.tables``.
"""

TOKEN_TTL_SECONDS = 60 * 60
JWT_ALGORITHM = "HS256"

# Stored timestamps are UTC, millisecond precision.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

ATTENDANCE_IMAGE_FOLDER = "AttendanceImages"

HALF_DAY_MARKERS = ("Half day", "आधा दिन")
