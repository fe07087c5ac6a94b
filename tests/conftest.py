"""Pytest fixtures for the interview slot engine tests."""

import pytest

from app.base.config import AppConfig
from app.services.conflict_simulator import NoConflictSimulator
from app.services.interview_scheduler_service import InterviewSchedulerService
from app.services.scheduling_store import SchedulingStore

from builders import NOW


@pytest.fixture
def config():
    return AppConfig(
        BOOK_LATENCY_SECONDS=0,
        RESCHEDULE_LATENCY_SECONDS=0,
        CANCEL_LATENCY_SECONDS=0,
        SIMULATED_CONFLICT_RATE=0,
    )


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def make_scheduler(config, clock):
    def _make(interviewer=None, conflict_simulator=None, **overrides):
        cfg = config.model_copy(update=overrides) if overrides else config
        store = SchedulingStore(interviewer) if interviewer else None
        return InterviewSchedulerService(
            store=store,
            config=cfg,
            conflict_simulator=conflict_simulator or NoConflictSimulator(),
            clock=clock,
        )
    return _make


@pytest.fixture
def scheduler(make_scheduler):
    """Scheduler with the default interviewer template."""
    return make_scheduler()


@pytest.fixture
def candidate():
    return {"name": "Ada Lovelace", "email": "ada@candidates.io"}
