import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rfid_attendance"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Calendar day boundary for tap alternation and daily limits
TIME_ZONE = os.getenv("TIME_ZONE", "Asia/Manila")
DAILY_TAP_LIMIT = int(os.getenv("DAILY_TAP_LIMIT", "8"))
RECENT_LOGS_LIMIT = int(os.getenv("RECENT_LOGS_LIMIT", "10"))
PHONE_PATTERN = os.getenv("PHONE_PATTERN", r"^\+63\d{10}$")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
ENABLE_DEBUG_ENDPOINTS = bool(int(os.getenv("ENABLE_DEBUG_ENDPOINTS", "1")))

STREAM_QUEUE_SIZE = int(os.getenv("STREAM_QUEUE_SIZE", "100"))
STREAM_KEEPALIVE_SECONDS = float(os.getenv("STREAM_KEEPALIVE_SECONDS", "15"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
