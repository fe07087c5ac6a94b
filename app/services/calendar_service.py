from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from app.base.models import Booking, DaySummary, InterviewSlot
from app.services.time_grid_service import parse_slot_id
from app.utils.time_utils import end_of_week, start_of_week


def week_days(anchor: date, week_starts_on: int = 0) -> List[date]:
    first = start_of_week(anchor, week_starts_on)
    return [first + timedelta(days=i) for i in range(7)]


def month_days(anchor: date, week_starts_on: int = 0) -> List[date]:
    """Full weeks covering the anchor's month, as shown in a month grid."""
    month_start = anchor.replace(day=1)
    next_month = (month_start + timedelta(days=32)).replace(day=1)
    month_end = next_month - timedelta(days=1)

    current = start_of_week(month_start, week_starts_on)
    last = end_of_week(month_end, week_starts_on)
    days = []
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days


def summarize_days(
    days: Iterable[date],
    slots: Iterable[InterviewSlot],
    bookings: Iterable[Booking],
    today: date,
    focus_month: Optional[int] = None,
) -> List[DaySummary]:
    slots_by_date: Dict[str, List[InterviewSlot]] = {}
    for slot in slots:
        slots_by_date.setdefault(slot.date, []).append(slot)

    bookings_by_date: Dict[str, List[Booking]] = {}
    for booking in bookings:
        parsed = parse_slot_id(booking.slot_id)
        if not booking.is_active or parsed is None:
            continue
        bookings_by_date.setdefault(parsed[0], []).append(booking)

    summaries = []
    for day in days:
        key = day.isoformat()
        day_slots = sorted(slots_by_date.get(key, []), key=lambda s: s.start_time)
        day_bookings = sorted(bookings_by_date.get(key, []), key=lambda b: parse_slot_id(b.slot_id)[1])
        booked = sum(1 for s in day_slots if s.is_booked)
        summaries.append(DaySummary(
            date=key,
            is_today=day == today,
            in_focus_month=focus_month is None or day.month == focus_month,
            available_count=len(day_slots) - booked,
            booked_count=booked,
            slots=day_slots,
            bookings=day_bookings,
        ))
    return summaries
