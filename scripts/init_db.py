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

from dayflow.database.bootstrap import apply_schema, ensure_database_exists, list_tables
from dayflow.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    database_url = getattr(settings, "DATABASE_URL", None)
    config = DBConfig.from_dict({**settings.DB_CONFIG, "url": database_url})

    ensure_database_exists(config)
    db = DatabaseConnection(config)
    apply_schema(db)
    tables = list_tables(db)
    target = database_url or f"{config.user}@{config.host}:{config.port}/{config.database}"
    print(f"OK: schema applied -> {target} (tables={len(tables)})")


if __name__ == "__main__":
    main()
