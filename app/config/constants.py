"""
Application Constants

This module contains all magic strings and numbers used throughout the application.
Centralizing constants makes the codebase more maintainable and easier to update.
"""

# ============================================================================
# Swipe Constants
# ============================================================================

SWIPE_LIKE = "like"
SWIPE_PASS = "pass"

# Clients built against the drag gesture still send right/left
SWIPE_DIRECTION_ALIASES = {
    "like": SWIPE_LIKE,
    "right": SWIPE_LIKE,
    "pass": SWIPE_PASS,
    "left": SWIPE_PASS,
}

MATCH_MESSAGE = "You both loved this moment! 💕"

# ============================================================================
# Pairing Constants
# ============================================================================

INVITE_TOKEN_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
INVITE_TOKEN_MAX_ATTEMPTS = 10

# ============================================================================
# Realtime Event Names
# ============================================================================

EVENT_NEW_MATCH = "new_match"
EVENT_NEW_MESSAGE = "new_message"
EVENT_USER_TYPING = "user_typing"
EVENT_USER_ONLINE = "user_online"

# Client -> server
EVENT_TYPING = "typing"
EVENT_STOP_TYPING = "stop_typing"

# ============================================================================
# Validation Constants
# ============================================================================

# User field lengths (should match database schema)
MAX_USERNAME_LENGTH = 80
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_URL_LENGTH = 1000
MAX_CAPTION_LENGTH = 500
MIN_PASSWORD_LENGTH = 6
MIN_AGE = 18
MAX_AGE = 120

DEFAULT_THEME = "light"
ALLOWED_THEMES = ("light", "dark")
