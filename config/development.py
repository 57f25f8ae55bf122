import os

# Attendance thresholds (hours) used when a shift does not define its own
STANDARD_FULL_DAY_HOURS = float(os.getenv("STANDARD_FULL_DAY_HOURS", "8"))
STANDARD_HALF_DAY_HOURS = float(os.getenv("STANDARD_HALF_DAY_HOURS", "4"))

# Minutes after shift end before a day is finalized
FINALIZATION_DELAY_MINUTES = int(os.getenv("FINALIZATION_DELAY_MINUTES", "15"))

DEFAULT_WORK_MODE = os.getenv("DEFAULT_WORK_MODE", "office")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "")

DEBUG = True
