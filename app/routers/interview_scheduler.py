from datetime import date
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Query

from app.base.config import settings
from app.base.error_handlers import raise_for_result
from app.base.models import (
    AvailabilityUpdateRequest,
    Booking,
    BookingDetail,
    CancelResponse,
    DaySummary,
    InterviewerSettings,
    InterviewSlot,
    PaginatedSlots,
    RescheduleRequest,
    SchedulingSnapshot,
    SettingsUpdate,
    SlotBookingRequest,
    WeeklyCountResponse,
)
from app.services.interview_scheduler_service import InterviewSchedulerService

router = APIRouter(prefix="/scheduler", tags=["Interview Scheduler"])
logger = logging.getLogger("scheduling.router")

scheduler = InterviewSchedulerService()


def get_scheduler() -> InterviewSchedulerService:
    return scheduler


# === Interviewer Configuration ===

@router.get("/settings", response_model=InterviewerSettings)
def read_settings(svc: InterviewSchedulerService = Depends(get_scheduler)):
    return svc.get_settings()


@router.patch("/settings", response_model=InterviewerSettings)
def patch_settings(req: SettingsUpdate, svc: InterviewSchedulerService = Depends(get_scheduler)):
    raise_for_result(svc.update_settings(req))
    return svc.get_settings()


@router.put("/availability", response_model=InterviewerSettings)
def replace_availability(req: AvailabilityUpdateRequest, svc: InterviewSchedulerService = Depends(get_scheduler)):
    raise_for_result(svc.update_availability(req.weekly_availability))
    return svc.get_settings()


# === Slots ===

@router.get("/slots", response_model=List[InterviewSlot])
def list_slots(svc: InterviewSchedulerService = Depends(get_scheduler)):
    return svc.get_slots()


@router.get("/slots/page", response_model=PaginatedSlots)
def page_slots(
    cursor: Optional[str] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    date_filter: Optional[date] = Query(None, alias="date"),
    svc: InterviewSchedulerService = Depends(get_scheduler),
):
    return svc.get_paginated_slots(
        cursor=cursor,
        limit=limit,
        date_filter=date_filter.isoformat() if date_filter else None,
    )


# === Bookings ===

@router.get("/bookings", response_model=List[Booking])
def list_bookings(svc: InterviewSchedulerService = Depends(get_scheduler)):
    return svc.get_bookings()


@router.get("/bookings/active", response_model=List[BookingDetail])
def list_active_bookings(svc: InterviewSchedulerService = Depends(get_scheduler)):
    return svc.get_active_bookings()


@router.post("/bookings", response_model=Booking, status_code=201)
async def book_slot(req: SlotBookingRequest, svc: InterviewSchedulerService = Depends(get_scheduler)):
    result = raise_for_result(await svc.book_slot(req.slot_id, req.candidate, req.expected_version))
    return result.booking


@router.delete("/bookings/{booking_id}", response_model=CancelResponse)
async def cancel_booking(booking_id: str, svc: InterviewSchedulerService = Depends(get_scheduler)):
    raise_for_result(await svc.cancel_booking(booking_id))
    return CancelResponse(status="cancelled", booking_id=booking_id)


@router.patch("/bookings/{booking_id}/reschedule", response_model=Booking)
async def reschedule_booking(
    booking_id: str,
    req: RescheduleRequest,
    svc: InterviewSchedulerService = Depends(get_scheduler),
):
    result = raise_for_result(await svc.reschedule_booking(booking_id, req.new_slot_id, req.expected_version))
    return result.booking


@router.get("/weekly-count", response_model=WeeklyCountResponse)
def weekly_count(svc: InterviewSchedulerService = Depends(get_scheduler)):
    return WeeklyCountResponse(
        weekly_booking_count=svc.get_weekly_booking_count(),
        max_interviews_per_week=svc.store.settings.max_interviews_per_week,
    )


# === Calendar & Combined State ===

@router.get("/calendar/week", response_model=List[DaySummary])
def calendar_week(anchor: Optional[date] = None, svc: InterviewSchedulerService = Depends(get_scheduler)):
    return svc.get_week_view(anchor)


@router.get("/calendar/month", response_model=List[DaySummary])
def calendar_month(anchor: Optional[date] = None, svc: InterviewSchedulerService = Depends(get_scheduler)):
    return svc.get_month_view(anchor)


@router.get("/state", response_model=SchedulingSnapshot)
def read_state(svc: InterviewSchedulerService = Depends(get_scheduler)):
    return svc.snapshot()
