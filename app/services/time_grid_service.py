import logging
import re
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Set, Tuple

from app.base.models import Booking, InterviewerSettings, InterviewSlot
from app.utils.time_utils import day_of_week, from_minutes, to_minutes

logger = logging.getLogger("scheduling.time_grid")

SLOT_ID_RE = re.compile(r"^slot-(\d{4}-\d{2}-\d{2})-(\d{2}:\d{2})$")


def make_slot_id(slot_date: str, start_time: str) -> str:
    return f"slot-{slot_date}-{start_time}"


def parse_slot_id(slot_id: str) -> Optional[Tuple[str, str]]:
    """Returns (date, start_time) for a generated slot id, or None if it isn't one."""
    match = SLOT_ID_RE.match(slot_id)
    if not match:
        return None
    return match.group(1), match.group(2)


def active_slot_ids(bookings: Iterable[Booking]) -> Set[str]:
    return {b.slot_id for b in bookings if b.is_active}


def generate_slots(
    settings: InterviewerSettings,
    bookings: Iterable[Booking],
    today: date,
    window_days: int = 14,
    slot_minutes: int = 30,
    versions: Optional[Dict[str, int]] = None,
) -> List[InterviewSlot]:
    """
    Expands the weekly availability template into bookable slots.

    Covers the `window_days` calendar days after `today` (today itself is never
    bookable). Each range is cut into back-to-back `slot_minutes` slots; a tail
    shorter than one step is dropped. Slot ids are derived from (date, start) so
    regenerating from the same inputs always yields the same grid.
    """
    booked_ids = active_slot_ids(bookings)
    versions = versions or {}
    slots: List[InterviewSlot] = []
    seen: Set[str] = set()

    for offset in range(1, window_days + 1):
        current = today + timedelta(days=offset)
        availability = settings.availability_for(day_of_week(current))
        if availability is None:
            continue

        date_str = current.isoformat()
        for time_range in availability.slots:
            cursor = to_minutes(time_range.start_time)
            range_end = to_minutes(time_range.end_time)

            while cursor + slot_minutes <= range_end:
                start = from_minutes(cursor)
                slot_id = make_slot_id(date_str, start)
                cursor += slot_minutes

                # Overlapping ranges on one day repeat ids; first one wins
                if slot_id in seen:
                    continue
                seen.add(slot_id)

                slots.append(InterviewSlot(
                    id=slot_id,
                    interviewer_id=settings.id,
                    date=date_str,
                    start_time=start,
                    end_time=from_minutes(cursor),
                    is_booked=slot_id in booked_ids,
                    version=versions.get(slot_id, 1),
                ))

    logger.debug(f"[TimeGrid] Generated {len(slots)} slots from {today.isoformat()} over {window_days} days")
    return slots
