"""
Hirefy Interview Slots Services Module

The booking engine behind the interview slot API. Each service owns one step:
expanding weekly availability into slots, paging open slots, recording
bookings, summarizing the calendar, and the facade that composes them.
"""

# === Slot Grid & Paging ===
from .time_grid_service import generate_slots, make_slot_id, parse_slot_id
from .pagination_service import paginate_slots

# === Booking Ledger ===
from .conflict_simulator import ConflictSimulator, NoConflictSimulator, RandomConflictSimulator
from .scheduling_store import SchedulingStore, default_interviewer_settings
from .booking_ledger_service import BookingLedgerService

# === Calendar Read Model ===
from .calendar_service import month_days, summarize_days, week_days

# === Facade ===
from .interview_scheduler_service import InterviewSchedulerService

# === Exported Interface ===
__all__ = [
    "generate_slots",
    "make_slot_id",
    "parse_slot_id",
    "paginate_slots",
    "ConflictSimulator",
    "NoConflictSimulator",
    "RandomConflictSimulator",
    "SchedulingStore",
    "default_interviewer_settings",
    "BookingLedgerService",
    "month_days",
    "summarize_days",
    "week_days",
    "InterviewSchedulerService",
]
