import os

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret-with-enough-length-for-hs256"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SESSION_DAYS = 7
SESSION_REFRESH_HOURS = 24

AUTO_INIT_DB = True
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
