import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rfid_attendance_test"),
    "connection_timeout": 2,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

TIME_ZONE = "Asia/Manila"
DAILY_TAP_LIMIT = 8
RECENT_LOGS_LIMIT = 10
PHONE_PATTERN = r"^\+63\d{10}$"

CORS_ORIGINS = "*"
ENABLE_DEBUG_ENDPOINTS = True

STREAM_QUEUE_SIZE = 10
STREAM_KEEPALIVE_SECONDS = 1.0

AUTO_INIT_DB = False
