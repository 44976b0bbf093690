"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STAFF_ID_MIN_LENGTH = 3
STAFF_ID_MAX_LENGTH = 20
STAFF_NAME_MIN_LENGTH = 2
STAFF_NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
PHONE_MAX_LENGTH = 20

ALLOWED_PHOTO_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")
MAX_PHOTO_BYTES = 2 * 1024 * 1024

# Relative to the public content root (the Flask static folder by default).
PHOTO_SUBDIR = "uploads/staff"

DATE_FORMAT = "%Y-%m-%d"
