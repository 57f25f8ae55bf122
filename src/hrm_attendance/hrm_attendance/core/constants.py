"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STANDARD_FULL_DAY_HOURS = 8
STANDARD_HALF_DAY_HOURS = 4
FINALIZATION_DELAY_MINUTES = 15
DEFAULT_WORK_MODE = "office"
WORK_MODES = ("office", "wfh", "hybrid", "field")

# Clock-ins before this hour count towards the first half of the day.
HALF_DAY_SPLIT_HOUR = 12
