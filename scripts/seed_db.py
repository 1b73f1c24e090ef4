from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.file_tracker.file_tracker.database.bootstrap import DEMO_USERS, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(db_config)

    print(f"OK: Seeded {db_config.get('user')}@{db_config.get('host')}/{db_config.get('database')}")
    for phone, password, first_name, last_name, _, role in DEMO_USERS:
        print(f"  {role.value:<5} {first_name} {last_name}: {phone} / {password}")


if __name__ == "__main__":
    main()
