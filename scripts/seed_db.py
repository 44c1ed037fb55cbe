from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.campus_attendance.campus_attendance.container import build_container
from src.campus_attendance.campus_attendance.database.bootstrap import seed_demo_data


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend="mysql",
        db_config=dict(settings.DB_CONFIG),
        password_hash_method=getattr(settings, "PASSWORD_HASH_METHOD", "scrypt"),
    )

    if seed_demo_data(container):
        print(f"OK: Seeded database -> {container.conn.config.describe()}")
    else:
        print(f"SKIP: {container.conn.config.describe()} already has users")


if __name__ == "__main__":
    main()
