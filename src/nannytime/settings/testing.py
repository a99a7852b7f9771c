import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "nannytime_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

GOOGLE_API_KEY = ""
SUMMARY_MODEL = "gemini-1.5-flash"

WEEK_START = 6
TIMEZONE = "UTC"
SESSION_TTL_HOURS = 12

ENFORCE_SINGLE_ACTIVE_SHIFT = True
ALLOW_INVERTED_SHIFT_RANGE = False

AUTO_INIT_DB = False
AUTO_SEED_DB = False
