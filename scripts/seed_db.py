from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv

from sports_institute.config import get_settings_module
from sports_institute.database.connection import DBConfig
from sports_institute.database.bootstrap import DEMO_MEMBERS, DEMO_PASSWORD, ensure_demo_members


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_members(db_config)
    print(
        "OK: Seeded demo members -> "
        f"{DBConfig.from_settings(db_config).describe()}"
    )
    for _, email, kind, _, _ in DEMO_MEMBERS:
        print(f"  {kind:<15} {email} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
