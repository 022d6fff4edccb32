import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", "dayflow-dev-jwt-secret")

# DATABASE_URL (any SQLAlchemy URL) wins over DB_CONFIG when set.
DATABASE_URL = os.getenv("DATABASE_URL")
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dayflow_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
SESSION_REFRESH_HOURS = int(os.getenv("SESSION_REFRESH_HOURS", "24"))

# Create missing tables on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Also upsert the demo admin/employee accounts
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
