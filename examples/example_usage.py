"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.campus_attendance.campus_attendance.container import build_container
from src.campus_attendance.campus_attendance.core.enums import Role
from src.campus_attendance.campus_attendance.database.bootstrap import seed_demo_data
from src.campus_attendance.campus_attendance.users.model import Caller


def main():
    container = build_container(backend="memory", password_hash_method="pbkdf2:sha256:1000")
    seed_demo_data(container)

    mazer = Caller(user_id="M001", role=Role.MAZER)
    head = Caller(user_id="H001", role=Role.HEAD)

    container.attendance_service.mark_attendance(caller=mazer, user_id="T002", work_date="2024-11-25", status="absent")
    print(container.attendance_service.get_history(caller=head, user_id="T002", limit=5))
    print(container.dashboard_service.get_stats(caller=head).to_dict())


if __name__ == "__main__":
    main()
