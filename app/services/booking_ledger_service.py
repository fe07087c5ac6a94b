import asyncio
import logging
import time
import uuid
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

from app.base.config import AppConfig, settings as app_settings
from app.base.metrics import booking_operation_count, booking_operation_duration
from app.base.models import (
    Booking,
    BookingStatus,
    CandidateInfo,
    ErrorCode,
    InterviewSlot,
    OperationResult,
)
from app.services.conflict_simulator import ConflictSimulator, RandomConflictSimulator
from app.services.scheduling_store import SchedulingStore
from app.services.time_grid_service import parse_slot_id
from app.utils.time_utils import parse_iso_date, start_of_week

logger = logging.getLogger("scheduling")

SlotSource = Callable[[], List[InterviewSlot]]


def _new_id() -> str:
    return uuid.uuid4().hex[:13]


class BookingLedgerService:
    """
    Book, cancel and reschedule interviews against the derived slot grid.

    Every operation waits out its simulated network latency first, then checks
    and commits under the store lock with no await in between. Failures come
    back as OperationResult values; nothing here raises for a business rule.
    """

    def __init__(
        self,
        store: SchedulingStore,
        slot_source: SlotSource,
        config: AppConfig = app_settings,
        conflict_simulator: Optional[ConflictSimulator] = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.store = store
        self.slot_source = slot_source
        self.config = config
        self.conflicts = conflict_simulator or RandomConflictSimulator(config.SIMULATED_CONFLICT_RATE)
        self.clock = clock
        self.id_factory = id_factory

    # === Queries ===

    def count_active_in_week(self, week_start: date) -> int:
        week_end = week_start + timedelta(days=7)
        count = 0
        for booking in self.store.bookings:
            if not booking.is_active:
                continue
            parsed = parse_slot_id(booking.slot_id)
            if parsed is None:
                continue
            if week_start <= parse_iso_date(parsed[0]) < week_end:
                count += 1
        return count

    def _slot_index(self) -> Dict[str, InterviewSlot]:
        return {slot.id: slot for slot in self.slot_source()}

    def _fail(self, operation: str, timer: float, code: ErrorCode, message: str) -> OperationResult:
        booking_operation_duration.labels(operation=operation).observe(time.perf_counter() - timer)
        logger.info(f"[{operation.title()}] Rejected: {code.value} | {message}")
        booking_operation_count.labels(operation=operation, outcome=code.value).inc()
        return OperationResult.fail(code, message)

    def _succeed(self, operation: str, timer: float, booking: Booking) -> OperationResult:
        booking_operation_duration.labels(operation=operation).observe(time.perf_counter() - timer)
        booking_operation_count.labels(operation=operation, outcome="success").inc()
        return OperationResult.ok(booking)

    # === Commands ===

    async def book_slot(
        self,
        slot_id: str,
        candidate: CandidateInfo,
        expected_version: Optional[int] = None,
    ) -> OperationResult:
        started_at = self.clock()
        timer = time.perf_counter()
        await asyncio.sleep(self.config.BOOK_LATENCY_SECONDS)

        async with self.store.lock:
            slot = self._slot_index().get(slot_id)
            if slot is None:
                return self._fail("book", timer, ErrorCode.SLOT_NOT_FOUND, "Slot not found")

            if slot.is_booked:
                return self._fail(
                    "book", timer, ErrorCode.SLOT_ALREADY_BOOKED,
                    "This slot has already been booked. Please select another slot."
                )

            week_start = start_of_week(parse_iso_date(slot.date), self.config.WEEK_STARTS_ON)
            if self.count_active_in_week(week_start) >= self.store.settings.max_interviews_per_week:
                return self._fail(
                    "book", timer, ErrorCode.WEEKLY_LIMIT_REACHED,
                    "Maximum interviews for this week has been reached."
                )

            if expected_version is not None and expected_version != slot.version:
                return self._fail(
                    "book", timer, ErrorCode.CONCURRENT_BOOKING_CONFLICT,
                    "This slot changed since you loaded it. Please refresh and try again."
                )

            if self.conflicts.should_conflict(slot_id):
                return self._fail(
                    "book", timer, ErrorCode.CONCURRENT_BOOKING_CONFLICT,
                    "Another user just booked this slot. Please refresh and try again."
                )

            booking = Booking(
                id=self.id_factory(),
                slot_id=slot_id,
                candidate_id=self.id_factory(),
                candidate_name=candidate.name,
                candidate_email=candidate.email,
                status=BookingStatus.CONFIRMED,
                created_at=started_at,
                updated_at=started_at,
            )
            self.store.add_booking(booking)
            self.store.bump_version(slot_id)

        logger.info(f"[Book] Booking {booking.id} confirmed for slot {slot_id} ({candidate.email})")
        return self._succeed("book", timer, booking)

    async def cancel_booking(self, booking_id: str) -> OperationResult:
        started_at = self.clock()
        timer = time.perf_counter()
        await asyncio.sleep(self.config.CANCEL_LATENCY_SECONDS)

        async with self.store.lock:
            booking = self.store.find_booking(booking_id)
            if booking is None:
                return self._fail("cancel", timer, ErrorCode.BOOKING_NOT_FOUND, "Booking not found")

            if booking.status == BookingStatus.CANCELLED:
                logger.info(f"[Cancel] Booking {booking_id} already cancelled, nothing to do")
                return self._succeed("cancel", timer, booking)

            cancelled = booking.model_copy(update={
                "status": BookingStatus.CANCELLED,
                "updated_at": started_at,
            })
            self.store.replace_booking(cancelled)
            self.store.bump_version(booking.slot_id)

        logger.info(f"[Cancel] Booking {booking_id} cancelled, slot {booking.slot_id} released")
        return self._succeed("cancel", timer, cancelled)

    async def reschedule_booking(
        self,
        booking_id: str,
        new_slot_id: str,
        expected_version: Optional[int] = None,
    ) -> OperationResult:
        started_at = self.clock()
        timer = time.perf_counter()
        await asyncio.sleep(self.config.RESCHEDULE_LATENCY_SECONDS)

        async with self.store.lock:
            booking = self.store.find_booking(booking_id)
            if booking is None:
                return self._fail("reschedule", timer, ErrorCode.BOOKING_NOT_FOUND, "Booking not found")

            if booking.status == BookingStatus.CANCELLED:
                return self._fail(
                    "reschedule", timer, ErrorCode.INVALID_STATE_TRANSITION,
                    "Cancelled bookings cannot be rescheduled"
                )

            new_slot = self._slot_index().get(new_slot_id)
            if new_slot is None:
                return self._fail("reschedule", timer, ErrorCode.SLOT_NOT_FOUND, "New slot not found")

            if new_slot.is_booked:
                return self._fail("reschedule", timer, ErrorCode.SLOT_ALREADY_BOOKED, "New slot is already booked")

            if expected_version is not None and expected_version != new_slot.version:
                return self._fail(
                    "reschedule", timer, ErrorCode.CONCURRENT_BOOKING_CONFLICT,
                    "The new slot changed since you loaded it. Please refresh and try again."
                )

            rescheduled = booking.model_copy(update={
                "slot_id": new_slot_id,
                "status": BookingStatus.RESCHEDULED,
                "updated_at": started_at,
            })
            self.store.replace_booking(rescheduled)
            self.store.bump_version(booking.slot_id)
            self.store.bump_version(new_slot_id)

        logger.info(f"[Reschedule] Booking {booking_id} moved {booking.slot_id} -> {new_slot_id}")
        return self._succeed("reschedule", timer, rescheduled)
