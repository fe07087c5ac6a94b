"""Tests for the scheduling facade: configuration, read model and calendar views."""

import asyncio
from datetime import date

import pytest

from app.base.models import BookingStatus, ErrorCode, SettingsUpdate
from app.services.scheduling_store import default_interviewer_settings

from builders import make_settings, monday_morning


class TestReads:
    def test_defaults(self, scheduler):
        settings = scheduler.get_settings()
        assert settings.id == "interviewer-1"
        assert settings.name == "John Smith"
        assert settings.max_interviews_per_week == 20
        assert [a.day_of_week for a in settings.weekly_availability] == [1, 2, 3, 4, 5]
        assert len(scheduler.get_slots()) == 112

    def test_settings_are_copies(self, scheduler):
        settings = scheduler.get_settings()
        settings.weekly_availability.clear()
        assert len(scheduler.get_settings().weekly_availability) == 5

    def test_paginated_slots_use_default_page_size(self, scheduler):
        page = scheduler.get_paginated_slots()
        assert len(page.data) == 10
        assert page.has_more is True
        assert page.total_count == 112

    def test_paginated_slots_reject_zero_limit(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.get_paginated_slots(limit=0)

    @pytest.mark.asyncio
    async def test_weekly_count_covers_current_week_only(self, scheduler, candidate):
        await scheduler.book_slot("slot-2026-10-20-10:00", candidate)
        await scheduler.book_slot("slot-2026-10-24-10:00", candidate)  # Saturday, no slots
        await scheduler.book_slot("slot-2026-10-26-09:00", candidate)
        assert scheduler.get_weekly_booking_count() == 1

    @pytest.mark.asyncio
    async def test_weekly_count_includes_rescheduled(self, scheduler, candidate):
        booked = await scheduler.book_slot("slot-2026-10-20-10:00", candidate)
        await scheduler.reschedule_booking(booked.booking.id, "slot-2026-10-21-09:00")
        assert scheduler.get_weekly_booking_count() == 1
        await scheduler.cancel_booking(booked.booking.id)
        assert scheduler.get_weekly_booking_count() == 0

    @pytest.mark.asyncio
    async def test_booked_slots_leave_pagination(self, scheduler, candidate):
        await scheduler.book_slot("slot-2026-10-20-10:00", candidate)
        page = scheduler.get_paginated_slots(limit=200)
        assert page.total_count == 111
        assert "slot-2026-10-20-10:00" not in {s.id for s in page.data}

    @pytest.mark.asyncio
    async def test_active_bookings_join_slot_details(self, scheduler, candidate):
        kept = await scheduler.book_slot("slot-2026-10-20-10:00", candidate)
        dropped = await scheduler.book_slot("slot-2026-10-20-10:30", candidate)
        await scheduler.cancel_booking(dropped.booking.id)

        details = scheduler.get_active_bookings()

        assert [d.booking.id for d in details] == [kept.booking.id]
        assert details[0].slot.start_time == "10:00"
        assert details[0].slot.is_booked is True

    @pytest.mark.asyncio
    async def test_snapshot(self, scheduler, candidate):
        await scheduler.book_slot("slot-2026-10-20-10:00", candidate)
        snapshot = scheduler.snapshot()
        assert snapshot.weekly_booking_count == 1
        assert len(snapshot.bookings) == 1
        assert len(snapshot.slots) == 112
        assert snapshot.is_loading is False
        assert snapshot.error is None


class TestLoadingState:
    @pytest.mark.asyncio
    async def test_is_loading_while_in_flight(self, make_scheduler, candidate):
        scheduler = make_scheduler(BOOK_LATENCY_SECONDS=0.05)
        task = asyncio.create_task(scheduler.book_slot("slot-2026-10-20-10:00", candidate))
        await asyncio.sleep(0.01)
        assert scheduler.is_loading is True
        await task
        assert scheduler.is_loading is False

    @pytest.mark.asyncio
    async def test_last_error_tracks_latest_operation(self, scheduler, candidate):
        failed = await scheduler.cancel_booking("missing")
        assert scheduler.last_error == failed.error
        await scheduler.book_slot("slot-2026-10-20-10:00", candidate)
        assert scheduler.last_error is None


class TestConfigurationUpdates:
    def test_update_settings_overwrites_given_fields(self, scheduler):
        result = scheduler.update_settings({"max_interviews_per_week": 5, "name": "Jane Doe"})
        assert result.success is True
        settings = scheduler.get_settings()
        assert settings.max_interviews_per_week == 5
        assert settings.name == "Jane Doe"
        assert settings.email == "john.smith@company.com"
        assert len(settings.weekly_availability) == 5

    def test_update_settings_accepts_model(self, scheduler):
        result = scheduler.update_settings(SettingsUpdate(email="jane@company.com"))
        assert result.success is True
        assert scheduler.get_settings().email == "jane@company.com"

    def test_invalid_settings_are_rejected(self, scheduler):
        result = scheduler.update_settings({"max_interviews_per_week": 0})
        assert result.success is False
        assert result.error_code == ErrorCode.INVALID_CONFIGURATION
        assert scheduler.get_settings().max_interviews_per_week == 20
        assert scheduler.last_error == result.error

    def test_update_availability_replaces_wholesale(self, scheduler):
        result = scheduler.update_availability([monday_morning()])
        assert result.success is True
        assert [a.day_of_week for a in scheduler.get_settings().weekly_availability] == [1]
        assert [s.id for s in scheduler.get_slots()] == [
            "slot-2026-10-26-09:00",
            "slot-2026-10-26-09:30",
            "slot-2026-11-02-09:00",
            "slot-2026-11-02-09:30",
        ]

    def test_update_availability_accepts_dicts(self, scheduler):
        result = scheduler.update_availability([
            {"day_of_week": 0, "slots": [{"start_time": "10:00", "end_time": "11:00"}]},
        ])
        assert result.success is True
        assert {s.date for s in scheduler.get_slots()} == {"2026-10-25", "2026-11-01"}

    def test_reversed_range_is_rejected_with_day_name(self, scheduler):
        result = scheduler.update_availability([
            {"day_of_week": 1, "slots": [{"start_time": "12:00", "end_time": "09:00"}]},
        ])
        assert result.success is False
        assert result.error_code == ErrorCode.INVALID_CONFIGURATION
        assert "Monday: start time must be before end time." in result.error
        assert len(scheduler.get_settings().weekly_availability) == 5

    def test_duplicate_days_are_rejected(self, scheduler):
        result = scheduler.update_availability([monday_morning(), monday_morning("14:00", "15:00")])
        assert result.error_code == ErrorCode.INVALID_CONFIGURATION

    def test_malformed_time_is_rejected(self, scheduler):
        result = scheduler.update_availability([
            {"day_of_week": 1, "slots": [{"start_time": "9:00", "end_time": "10:00"}]},
        ])
        assert result.error_code == ErrorCode.INVALID_CONFIGURATION

    @pytest.mark.asyncio
    async def test_shrinking_availability_keeps_booking_history(self, scheduler, candidate):
        booked = await scheduler.book_slot("slot-2026-10-20-10:00", candidate)
        scheduler.update_availability([])
        assert scheduler.get_slots() == []
        assert scheduler.get_bookings()[0].id == booked.booking.id
        assert scheduler.get_active_bookings()[0].slot is None


class TestCalendarViews:
    @pytest.mark.asyncio
    async def test_week_view_counts_match_slot_state(self, scheduler, candidate):
        booked = await scheduler.book_slot("slot-2026-10-20-10:00", candidate)
        await scheduler.reschedule_booking(booked.booking.id, "slot-2026-10-21-09:00")

        days = {d.date: d for d in scheduler.get_week_view()}

        assert list(days) == [f"2026-10-{n}" for n in range(18, 25)]
        assert days["2026-10-19"].is_today is True
        assert days["2026-10-19"].available_count == 0  # today is never bookable
        assert days["2026-10-20"].booked_count == 0
        assert days["2026-10-20"].bookings == []
        assert days["2026-10-21"].booked_count == 1
        assert [b.status for b in days["2026-10-21"].bookings] == [BookingStatus.RESCHEDULED]
        assert days["2026-10-21"].available_count == 11

    def test_month_view_spans_full_weeks(self, scheduler):
        days = scheduler.get_month_view(date(2026, 10, 5))
        assert days[0].date == "2026-09-27"
        assert days[-1].date == "2026-10-31"
        assert len(days) == 35
        assert days[0].in_focus_month is False
        assert {d.date for d in days if d.in_focus_month} == {f"2026-10-{n:02d}" for n in range(1, 32)}

    def test_empty_interviewer(self, make_scheduler):
        scheduler = make_scheduler(make_settings([]))
        assert all(d.available_count == 0 for d in scheduler.get_week_view())


def test_default_interviewer_comes_from_config(config):
    custom = config.model_copy(update={"DEFAULT_INTERVIEWER_NAME": "Jane Doe", "DEFAULT_MAX_INTERVIEWS_PER_WEEK": 3})
    settings = default_interviewer_settings(custom)
    assert settings.name == "Jane Doe"
    assert settings.max_interviews_per_week == 3
