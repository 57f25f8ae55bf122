import os

STANDARD_FULL_DAY_HOURS = float(os.getenv("STANDARD_FULL_DAY_HOURS", "8"))
STANDARD_HALF_DAY_HOURS = float(os.getenv("STANDARD_HALF_DAY_HOURS", "4"))

FINALIZATION_DELAY_MINUTES = int(os.getenv("FINALIZATION_DELAY_MINUTES", "15"))

DEFAULT_WORK_MODE = os.getenv("DEFAULT_WORK_MODE", "office")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/attendance.log")

DEBUG = False
