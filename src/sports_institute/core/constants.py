"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_IDLE_LOGOUT_MINUTES = 5
DEFAULT_HISTORY_LIMIT = 100

RECEIPT_PREFIX = "TRN"
RECEIPT_RANDOM_MIN = 1000
RECEIPT_RANDOM_MAX = 9999

LANDING_ROUTE = "/"
