"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NOT_SPECIFIED = "Not specified"

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_LEAVE_LIST_LIMIT = 50
