"""Example: drive the service layer directly (no Flask).

Uses the in-memory backend so it runs without a database.
"""

from datetime import datetime

from worktime_tracker.container import build_container
from worktime_tracker.core.enums import WindowKind


def main():
    container = build_container(store_backend="memory")

    container.session_controller.start(1, now=datetime(2025, 3, 3, 9, 0))
    print(container.aggregator.totals(1, datetime(2025, 3, 3, 9, 30)))

    stopped = container.session_controller.stop(1, now=datetime(2025, 3, 3, 9, 45))
    print(f"closed session {stopped.session.session_id}: {stopped.duration_minutes} min")

    day = container.aggregator.total_for(1, WindowKind.DAY, datetime(2025, 3, 3, 18, 0))
    print(f"{day.anchor}: {day.total_minutes} min")
    print(container.target_tracker.progress(1, None, datetime(2025, 3, 3, 18, 0)))


if __name__ == "__main__":
    main()
