import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "nannytime"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "gemini-1.5-flash")

WEEK_START = int(os.getenv("WEEK_START", "6"))

# IANA zone used to resolve "this week" / "this month" for pay stubs
TIMEZONE = os.getenv("TIMEZONE", "UTC")

# Sessions older than this are revoked
SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", "12"))

ENFORCE_SINGLE_ACTIVE_SHIFT = bool(int(os.getenv("ENFORCE_SINGLE_ACTIVE_SHIFT", "1")))
ALLOW_INVERTED_SHIFT_RANGE = bool(int(os.getenv("ALLOW_INVERTED_SHIFT_RANGE", "0")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
