"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

import logging

# Log panel level names, ordered from most to least verbose
LOG_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARNING",
    logging.ERROR: "ERROR",
}


def log_level_from_string(level_str: str) -> int:
    """Convert a level name to a logging level. Returns DEBUG if invalid."""
    level = logging.getLevelName(level_str.upper())
    return level if isinstance(level, int) else logging.DEBUG


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100

# Message timestamps
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Shown under the input bar
DISCLAIMER_TEXT = "AI responses may vary. Please verify important information."

APP_TITLE = "Concise Chat Assist"
APP_SUBTITLE = "AI-Powered Chat Assistant"
THEME_NAME = "catppuccin-mocha"
