from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from app.utils.time_utils import DAY_NAMES, TIME_PATTERN


# === 🕒 Availability ===

class TimeRange(BaseModel):
    start_time: str = Field(..., pattern=TIME_PATTERN, description="Range start, HH:MM 24-hour", examples=["09:00"])
    end_time: str = Field(..., pattern=TIME_PATTERN, description="Range end (exclusive), HH:MM 24-hour", examples=["12:00"])


class WeeklyAvailability(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday, 1 = Monday, ...")
    slots: List[TimeRange] = Field(default_factory=list, description="Ordered time ranges for this day")

    @model_validator(mode="after")
    def check_ranges(self):
        for time_range in self.slots:
            if time_range.start_time >= time_range.end_time:
                raise ValueError(f"{DAY_NAMES[self.day_of_week]}: start time must be before end time.")
        return self


class InterviewerSettings(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    email: EmailStr
    max_interviews_per_week: int = Field(..., gt=0)
    weekly_availability: List[WeeklyAvailability] = Field(default_factory=list)

    @field_validator("weekly_availability")
    @classmethod
    def unique_days(cls, availability):
        days = [entry.day_of_week for entry in availability]
        if len(days) != len(set(days)):
            raise ValueError("weekly_availability must contain at most one entry per day_of_week")
        return availability

    def availability_for(self, day: int) -> Optional[WeeklyAvailability]:
        for entry in self.weekly_availability:
            if entry.day_of_week == day:
                return entry
        return None


class SettingsUpdate(BaseModel):
    """Partial settings update; only fields that were sent are applied."""
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    max_interviews_per_week: Optional[int] = Field(None, gt=0)
    weekly_availability: Optional[List[WeeklyAvailability]] = None


class AvailabilityUpdateRequest(BaseModel):
    weekly_availability: List[WeeklyAvailability]


# === 📅 Slots & Bookings ===

class InterviewSlot(BaseModel):
    id: str
    interviewer_id: str
    date: str = Field(..., description="ISO date YYYY-MM-DD")
    start_time: str
    end_time: str
    is_booked: bool = False
    version: int = 1


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


ACTIVE_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.RESCHEDULED})


class Booking(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    slot_id: str
    candidate_id: str
    candidate_name: str
    candidate_email: EmailStr
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: datetime
    updated_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class CandidateInfo(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, examples=["Ada Lovelace"])
    email: EmailStr = Field(..., examples=["ada@candidates.io"])


class PaginatedSlots(BaseModel):
    data: List[InterviewSlot]
    cursor: Optional[str] = Field(None, description="Id of the last slot on this page when more remain")
    has_more: bool
    total_count: int


# === ⚠️ Operation Results ===

class ErrorCode(str, Enum):
    SLOT_NOT_FOUND = "SlotNotFound"
    BOOKING_NOT_FOUND = "BookingNotFound"
    SLOT_ALREADY_BOOKED = "SlotAlreadyBooked"
    WEEKLY_LIMIT_REACHED = "WeeklyLimitReached"
    CONCURRENT_BOOKING_CONFLICT = "ConcurrentBookingConflict"
    INVALID_STATE_TRANSITION = "InvalidStateTransition"
    INVALID_CONFIGURATION = "InvalidConfiguration"


class OperationResult(BaseModel):
    success: bool
    error_code: Optional[ErrorCode] = None
    error: Optional[str] = None
    booking: Optional[Booking] = None

    @classmethod
    def ok(cls, booking: Optional[Booking] = None) -> "OperationResult":
        return cls(success=True, booking=booking)

    @classmethod
    def fail(cls, code: ErrorCode, message: str) -> "OperationResult":
        return cls(success=False, error_code=code, error=message)


# === 🗓 Read Models ===

class BookingDetail(BaseModel):
    booking: Booking
    slot: Optional[InterviewSlot] = None


class DaySummary(BaseModel):
    date: str
    is_today: bool
    in_focus_month: bool = True
    available_count: int
    booked_count: int
    slots: List[InterviewSlot]
    bookings: List[Booking]


class SchedulingSnapshot(BaseModel):
    settings: InterviewerSettings
    slots: List[InterviewSlot]
    bookings: List[Booking]
    weekly_booking_count: int
    is_loading: bool
    error: Optional[str] = None


# === 🌐 API Requests ===

class SlotBookingRequest(BaseModel):
    slot_id: str
    candidate: CandidateInfo
    expected_version: Optional[int] = Field(None, description="Slot version the client last saw")


class RescheduleRequest(BaseModel):
    new_slot_id: str
    expected_version: Optional[int] = None


class WeeklyCountResponse(BaseModel):
    weekly_booking_count: int
    max_interviews_per_week: int


class CancelResponse(BaseModel):
    status: str
    booking_id: str
