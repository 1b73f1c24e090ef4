"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the file lifecycle rules live in the services.
"""

import importlib

from config import get_settings_module

from src.file_tracker.file_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    admin = container.auth_service.authenticate("9000000001", "admin123")
    print(container.stats_service.compute(admin))
    for view in container.file_service.list_all(admin, limit=5):
        print(view.to_dict())


if __name__ == "__main__":
    main()
