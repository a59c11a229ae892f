"""Utility constants and helpers for sdate.

Time unit constants represent durations in seconds.
Format keywords are matched case-insensitively by the format translator.
"""

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600

# Output format keywords
EPOCH_KEYWORDS = frozenset({"unix", "epoch"})
RFC3339_KEYWORD = "rfc3339"

DEFAULT_FORMAT = RFC3339_KEYWORD
