import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = "memory"
STORAGE_PATH = ""

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "college_portal_test"),
}

AUTO_INIT_DB = False
AUTO_SEED = bool(int(os.getenv("AUTO_SEED", "0")))

ATTENDANCE_ALERT_THRESHOLD = 75
