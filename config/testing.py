STANDARD_FULL_DAY_HOURS = 8
STANDARD_HALF_DAY_HOURS = 4

FINALIZATION_DELAY_MINUTES = 15

DEFAULT_WORK_MODE = "office"

LOG_LEVEL = "WARNING"
LOG_FILE = ""

DEBUG = False
TESTING = True
