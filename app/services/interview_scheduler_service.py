# app/services/interview_scheduler_service.py

import logging
from datetime import date, datetime
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from app.base.config import AppConfig, settings as app_settings
from app.base.models import (
    Booking,
    BookingDetail,
    CandidateInfo,
    DaySummary,
    ErrorCode,
    InterviewerSettings,
    InterviewSlot,
    OperationResult,
    PaginatedSlots,
    SchedulingSnapshot,
    SettingsUpdate,
    WeeklyAvailability,
)
from app.services.booking_ledger_service import BookingLedgerService
from app.services.calendar_service import month_days, summarize_days, week_days
from app.services.conflict_simulator import ConflictSimulator
from app.services.pagination_service import paginate_slots
from app.services.scheduling_store import SchedulingStore, default_interviewer_settings
from app.services.time_grid_service import generate_slots
from app.utils.time_utils import start_of_week

logger = logging.getLogger("scheduling")

_availability_adapter = TypeAdapter(List[WeeklyAvailability])


def _validation_message(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        msg = error.get("msg", "invalid value").removeprefix("Value error, ")
        messages.append(f"{location}: {msg}" if location else msg)
    return "; ".join(messages)


class InterviewSchedulerService:
    """
    Single entry point for presentation code: interviewer configuration, the
    derived slot grid, bookings and the combined read model.

    Slots are recomputed from (settings, bookings) on every read, so there is
    never a slot list to keep in sync.
    """

    def __init__(
        self,
        store: Optional[SchedulingStore] = None,
        config: AppConfig = app_settings,
        conflict_simulator: Optional[ConflictSimulator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.clock = clock
        self.store = store or SchedulingStore(default_interviewer_settings(config))
        self.ledger = BookingLedgerService(
            self.store,
            slot_source=self.get_slots,
            config=config,
            conflict_simulator=conflict_simulator,
            clock=clock,
        )
        self._in_flight = 0
        self.last_error: Optional[str] = None

    def today(self) -> date:
        return self.clock().date()

    # === Reads ===

    def get_settings(self) -> InterviewerSettings:
        return self.store.settings.model_copy(deep=True)

    def get_bookings(self) -> List[Booking]:
        return list(self.store.bookings)

    def get_slots(self) -> List[InterviewSlot]:
        return generate_slots(
            self.store.settings,
            self.store.bookings,
            today=self.today(),
            window_days=self.config.SCHEDULING_WINDOW_DAYS,
            slot_minutes=self.config.SLOT_DURATION_MINUTES,
            versions=self.store.slot_versions,
        )

    def get_weekly_booking_count(self) -> int:
        week_start = start_of_week(self.today(), self.config.WEEK_STARTS_ON)
        return self.ledger.count_active_in_week(week_start)

    def get_paginated_slots(
        self,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        date_filter: Optional[str] = None,
    ) -> PaginatedSlots:
        return paginate_slots(
            self.get_slots(),
            cursor=cursor,
            limit=self.config.DEFAULT_PAGE_SIZE if limit is None else limit,
            date_filter=date_filter,
        )

    def get_active_bookings(self) -> List[BookingDetail]:
        slots = {slot.id: slot for slot in self.get_slots()}
        return [
            BookingDetail(booking=b, slot=slots.get(b.slot_id))
            for b in self.store.bookings
            if b.is_active
        ]

    def get_week_view(self, anchor: Optional[date] = None) -> List[DaySummary]:
        anchor = anchor or self.today()
        return summarize_days(
            week_days(anchor, self.config.WEEK_STARTS_ON),
            self.get_slots(),
            self.store.bookings,
            today=self.today(),
        )

    def get_month_view(self, anchor: Optional[date] = None) -> List[DaySummary]:
        anchor = anchor or self.today()
        return summarize_days(
            month_days(anchor, self.config.WEEK_STARTS_ON),
            self.get_slots(),
            self.store.bookings,
            today=self.today(),
            focus_month=anchor.month,
        )

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def snapshot(self) -> SchedulingSnapshot:
        return SchedulingSnapshot(
            settings=self.get_settings(),
            slots=self.get_slots(),
            bookings=self.get_bookings(),
            weekly_booking_count=self.get_weekly_booking_count(),
            is_loading=self.is_loading,
            error=self.last_error,
        )

    # === Configuration ===

    def update_settings(self, partial: Union[SettingsUpdate, Dict[str, Any]]) -> OperationResult:
        self.last_error = None
        try:
            if not isinstance(partial, SettingsUpdate):
                partial = SettingsUpdate.model_validate(partial)
            merged = self.store.settings.model_dump()
            merged.update(partial.model_dump(exclude_unset=True, exclude_none=True))
            updated = InterviewerSettings.model_validate(merged)
        except ValidationError as exc:
            return self._config_error("settings", exc)

        self.store.settings = updated
        logger.info(f"[Settings] Updated fields: {sorted(partial.model_fields_set)}")
        return OperationResult.ok()

    def update_availability(
        self, availability: Iterable[Union[WeeklyAvailability, Dict[str, Any]]]
    ) -> OperationResult:
        self.last_error = None
        try:
            entries = _availability_adapter.validate_python(
                [a.model_dump() if isinstance(a, WeeklyAvailability) else a for a in availability]
            )
            updated = InterviewerSettings.model_validate({
                **self.store.settings.model_dump(),
                "weekly_availability": [e.model_dump() for e in entries],
            })
        except ValidationError as exc:
            return self._config_error("availability", exc)

        self.store.settings = updated
        logger.info(f"[Availability] Replaced with {len(entries)} day(s)")
        return OperationResult.ok()

    def _config_error(self, what: str, exc: ValidationError) -> OperationResult:
        message = _validation_message(exc)
        logger.warning(f"[Config] Rejected {what} update: {message}")
        self.last_error = message
        return OperationResult.fail(ErrorCode.INVALID_CONFIGURATION, message)

    # === Bookings ===

    async def _track(self, operation: Awaitable[OperationResult]) -> OperationResult:
        self._in_flight += 1
        self.last_error = None
        try:
            result = await operation
        finally:
            self._in_flight -= 1
        if not result.success:
            self.last_error = result.error
        return result

    async def book_slot(
        self,
        slot_id: str,
        candidate: Union[CandidateInfo, Dict[str, str]],
        expected_version: Optional[int] = None,
    ) -> OperationResult:
        if not isinstance(candidate, CandidateInfo):
            candidate = CandidateInfo.model_validate(candidate)
        return await self._track(self.ledger.book_slot(slot_id, candidate, expected_version))

    async def cancel_booking(self, booking_id: str) -> OperationResult:
        return await self._track(self.ledger.cancel_booking(booking_id))

    async def reschedule_booking(
        self,
        booking_id: str,
        new_slot_id: str,
        expected_version: Optional[int] = None,
    ) -> OperationResult:
        return await self._track(self.ledger.reschedule_booking(booking_id, new_slot_id, expected_version))
