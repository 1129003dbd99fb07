"""Example: drive the service layer directly, without Flask.

Controllers are thin; everything below is what the HTTP endpoints call.
"""

import importlib

from dotenv import load_dotenv

from sports_institute.config import get_settings_module
from sports_institute.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, attendance_policy=settings.ATTENDANCE_POLICY)

    role = container.role_resolver.resolve("trainer-demo")
    print(role.kind.value, sorted(a.value for a in role.actions))
    print(container.checkin_service.get_history_ui("trainer-demo", limit=5))
    for row in container.salary_service.salary_board("inst-demo", "2026-10"):
        print(row.trainer_name, row.status.value)


if __name__ == "__main__":
    main()
