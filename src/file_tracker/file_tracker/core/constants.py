"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_MINUTES = 60
MIN_PASSWORD_LENGTH = 6
UNKNOWN_DISPLAY_NAME = "Unknown"
