import asyncio
from typing import Dict, List, Optional

from app.base.config import AppConfig, settings as app_settings
from app.base.models import Booking, InterviewerSettings, TimeRange, WeeklyAvailability


def default_interviewer_settings(config: AppConfig = app_settings) -> InterviewerSettings:
    def day(day_of_week: int, *ranges):
        return WeeklyAvailability(
            day_of_week=day_of_week,
            slots=[TimeRange(start_time=start, end_time=end) for start, end in ranges],
        )

    return InterviewerSettings(
        id=config.DEFAULT_INTERVIEWER_ID,
        name=config.DEFAULT_INTERVIEWER_NAME,
        email=config.DEFAULT_INTERVIEWER_EMAIL,
        max_interviews_per_week=config.DEFAULT_MAX_INTERVIEWS_PER_WEEK,
        weekly_availability=[
            day(1, ("09:00", "12:00"), ("14:00", "17:00")),
            day(2, ("10:00", "12:00"), ("13:00", "16:00")),
            day(3, ("09:00", "11:00"), ("14:00", "18:00")),
            day(4, ("09:00", "12:00"), ("14:00", "17:00")),
            day(5, ("10:00", "15:00")),
        ],
    )


class SchedulingStore:
    """
    Session-scoped engine state: interviewer settings, the booking ledger and
    per-slot versions. Owned by InterviewSchedulerService; everything else gets
    read-only copies through the facade.
    """

    def __init__(self, interviewer: Optional[InterviewerSettings] = None):
        self.settings: InterviewerSettings = interviewer or default_interviewer_settings()
        self.bookings: List[Booking] = []
        self.slot_versions: Dict[str, int] = {}
        self.lock = asyncio.Lock()

    def find_booking(self, booking_id: str) -> Optional[Booking]:
        for booking in self.bookings:
            if booking.id == booking_id:
                return booking
        return None

    def add_booking(self, booking: Booking) -> None:
        self.bookings.append(booking)

    def replace_booking(self, booking: Booking) -> None:
        for index, existing in enumerate(self.bookings):
            if existing.id == booking.id:
                self.bookings[index] = booking
                return
        raise KeyError(booking.id)

    def bump_version(self, slot_id: str) -> int:
        version = self.slot_versions.get(slot_id, 1) + 1
        self.slot_versions[slot_id] = version
        return version
