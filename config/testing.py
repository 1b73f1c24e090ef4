import os

SECRET_KEY = "test-secret"
JWT_SECRET_KEY = "test-jwt-secret-key-that-is-long-enough"
TOKEN_TTL_MINUTES = 60

JWT_COOKIE_SECURE = False
JWT_COOKIE_CSRF_PROTECT = False

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "file_tracker_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
