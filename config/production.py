import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")
STORAGE_PATH = os.getenv("STORAGE_PATH", "data/portal.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "college_portal"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED = bool(int(os.getenv("AUTO_SEED", "0")))

ATTENDANCE_ALERT_THRESHOLD = int(os.getenv("ATTENDANCE_ALERT_THRESHOLD", "75"))
