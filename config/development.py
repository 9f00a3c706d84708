import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# memory | json | mysql
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
STORAGE_PATH = os.getenv("STORAGE_PATH", "data/portal.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "college_portal"),
}

# If enabled (mysql backend only), app applies database/schema.sql on startup (idempotent).
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Serve the demo seed data until real data has been saved.
AUTO_SEED = bool(int(os.getenv("AUTO_SEED", "1")))

ATTENDANCE_ALERT_THRESHOLD = int(os.getenv("ATTENDANCE_ALERT_THRESHOLD", "75"))
