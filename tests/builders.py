"""Builders for interviewer settings and fixed dates used across the tests."""

from datetime import date, datetime

from app.base.models import InterviewerSettings, TimeRange, WeeklyAvailability
from app.services.conflict_simulator import ConflictSimulator

# Monday 2026-10-19; the default grid covers Tue 2026-10-20 .. Mon 2026-11-02
NOW = datetime(2026, 10, 19, 10, 0)
TODAY = NOW.date()
NEXT_MONDAY = date(2026, 10, 26)


class AlwaysConflict(ConflictSimulator):
    def should_conflict(self, slot_id: str) -> bool:
        return True


def make_settings(availability=None, max_per_week=20) -> InterviewerSettings:
    return InterviewerSettings(
        id="interviewer-1",
        name="John Smith",
        email="john.smith@company.com",
        max_interviews_per_week=max_per_week,
        weekly_availability=availability or [],
    )


def day(day_of_week: int, *ranges) -> WeeklyAvailability:
    return WeeklyAvailability(
        day_of_week=day_of_week,
        slots=[TimeRange(start_time=start, end_time=end) for start, end in ranges],
    )


def monday_morning(start="09:00", end="10:00") -> WeeklyAvailability:
    return day(1, (start, end))
