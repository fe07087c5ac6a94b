from typing import Iterable, Optional, Tuple

from app.base.models import InterviewSlot, PaginatedSlots


def slot_sort_key(slot: InterviewSlot) -> Tuple[str, str, str]:
    return slot.date, slot.start_time, slot.id


def paginate_slots(
    slots: Iterable[InterviewSlot],
    cursor: Optional[str] = None,
    limit: int = 10,
    date_filter: Optional[str] = None,
) -> PaginatedSlots:
    """
    Cursor pagination over open slots in (date, start_time) order.

    The cursor is the id of the last slot the caller saw. If that slot is no
    longer in the open set (it was booked in between, or the filter changed),
    paging starts over from the first slot.
    """
    if limit < 1:
        raise ValueError("limit must be a positive integer")

    open_slots = [s for s in slots if not s.is_booked]
    if date_filter:
        open_slots = [s for s in open_slots if s.date == date_filter]
    open_slots.sort(key=slot_sort_key)

    start_index = 0
    if cursor:
        for index, slot in enumerate(open_slots):
            if slot.id == cursor:
                start_index = index + 1
                break

    page = open_slots[start_index:start_index + limit]
    next_cursor = None
    if len(page) == limit and start_index + limit < len(open_slots):
        next_cursor = page[-1].id

    return PaginatedSlots(
        data=page,
        cursor=next_cursor,
        has_more=next_cursor is not None,
        total_count=len(open_slots),
    )
