"""Console live view: prints who has not logged time in the current class period.

Usage: python scripts/live_update.py [--hour N]
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.attendance_dashboard.attendance_dashboard.common.datetime_utils import now_local
from src.attendance_dashboard.attendance_dashboard.common.logging_utils import configure_logging
from src.attendance_dashboard.attendance_dashboard.container import build_container
from src.attendance_dashboard.attendance_dashboard.main import load_settings
from src.attendance_dashboard.attendance_dashboard.periods.poller import LivePoller
from src.attendance_dashboard.attendance_dashboard.periods.scheduler import PeriodScheduler


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--hour", help="pin a class hour (1-4) while no period is running")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(settings)

    scheduler = PeriodScheduler(container.periods)
    if args.hour:
        scheduler.pin(args.hour)

    def show(period, result):
        names = {s.key: s.name for s in container.roster_service.students_for_hour(period.hour)}
        stamp = now_local().strftime("%H:%M:%S")
        print(f"[{stamp}] {period.label}: {result.absent_count} of {result.total_students} absent")
        for email in result.absent:
            print(f"    - {names.get(email, email)}")

    def check(period):
        return container.attendance_service.check_period(period, day=now_local().date())

    poller = LivePoller(scheduler, check, on_result=show)
    poller.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop(timeout=5)


if __name__ == "__main__":
    main()
