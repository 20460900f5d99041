"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_SESSION_DAYS = 7
DEFAULT_FUTURE_GRACE_DAYS = 0
DEFAULT_REPORT_DAYS = 30

# Smallest currency unit used for the final gross pay.
CURRENCY_QUANTUM = Decimal("0.01")

NOTES_SEPARATOR = "\n"
