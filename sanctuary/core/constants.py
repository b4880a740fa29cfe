"""Application constants.

Magic strings and numbers used throughout the check-in service live here so
they are easy to find and change.
"""
import string

# Security Code Configuration
# Codes are printed on the child tag and the pickup tag and compared by eye,
# so they stay short and use only uppercase letters and digits.
SECURITY_CODE_LENGTH = 6
SECURITY_CODE_ALPHABET = string.ascii_uppercase + string.digits

# Session types offered when creating a check-in session
SESSION_TYPES = ("service", "class", "event", "group")
DEFAULT_SESSION_TYPE = "service"

# Ledger partitions
STATUS_ACTIVE = "active"
STATUS_CHECKED_OUT = "checked_out"

# Roster empty-state messages
ROSTER_NO_MATCHES = "No students found"
ROSTER_ALL_CHECKED_IN = "All students are checked in"

# Shown for a student record whose student row no longer exists
UNKNOWN_STUDENT_NAME = "Unknown student"

# Field limits
MAX_NAME_LENGTH = 200
MAX_NOTES_LENGTH = 1000
MAX_SEARCH_LENGTH = 100
MAX_LOCATION_LENGTH = 200

# JWT Token Configuration
# Token expiration time in minutes (12 hours covers a full Sunday)
ACCESS_TOKEN_EXPIRE_MINUTES = 720
