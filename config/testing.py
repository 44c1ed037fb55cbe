import os

SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "campus_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SESSION_LIFETIME_HOURS = 24
# Cheap hashing keeps the seeded test apps fast
PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"

AUTO_INIT_DB = False
AUTO_SEED_DB = True
