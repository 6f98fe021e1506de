"""Example: drive the engines directly (no Flask).

Controllers are a thin layer; the rules live in AttendanceEngine and LeaveEngine.
"""

import importlib
import logging
from datetime import timedelta

from config import get_settings_module

from src.timeleave.timeleave.container import build_container


def main():
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    profile = container.identity_provider.get_profile(1)
    if profile is None:
        raise SystemExit("Seed the database first (scripts/seed_db.py)")

    outcome = container.attendance_engine.check_in(profile.employee_id, profile)
    print("check-in:", outcome.value if outcome.ok else outcome.rejection)

    tomorrow = container.clock.now().date() + timedelta(days=1)
    outcome = container.leave_engine.submit_leave(
        profile.employee_id,
        profile,
        from_date=tomorrow,
        to_date=tomorrow + timedelta(days=1),
        leave_type_id=1,
        description="Family event",
    )
    print("leave:", outcome.value if outcome.ok else outcome.rejection)


if __name__ == "__main__":
    main()
