from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "dayflow"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from dayflow.database.bootstrap import DEMO_USERS, apply_schema, ensure_demo_users
from dayflow.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict({**settings.DB_CONFIG, "url": getattr(settings, "DATABASE_URL", None)})

    db = DatabaseConnection(config)
    apply_schema(db)
    ensure_demo_users(db)

    for _, email, password, role, employee_id in DEMO_USERS:
        print(f"OK: {role.value:<8} {email} / {password} (employee ID {employee_id})")


if __name__ == "__main__":
    main()
