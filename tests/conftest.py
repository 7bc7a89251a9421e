"""Shared fixtures for the test suite."""
from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest

from gym_enricher.config import Settings
from gym_enricher.container import AppContainer
from gym_enricher.models import GymRecord, UpdateCycleStats
from gym_enricher.services import AutoUpdateScheduler, PreRunGate, RateLimiter, StalenessOracle

from fakes import FakeClock, FakeTimer, InMemoryGymStore, RecordingSleep


@pytest.fixture
def fake_clock():
    """Clock fixed at 2024-03-01 10:00."""
    return FakeClock(datetime(2024, 3, 1, 10, 0, 0))


@pytest.fixture
def fake_timer():
    return FakeTimer()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def instant_limiter(recording_sleep):
    """Rate limiter with a frozen clock, so every acquire after the first waits the full interval."""
    return RateLimiter(0.5, clock=lambda: 0.0, sleep=recording_sleep)


@pytest.fixture
def gyms():
    return [
        GymRecord(id=1, name="알파짐", address="old address 1", phone="02-111-1111"),
        GymRecord(id=2, name="베타피트니스", address="old address 2"),
        GymRecord(id=3, name="감마헬스장", address="old address 3"),
    ]


@pytest.fixture
def gym_store(gyms):
    return InMemoryGymStore(gyms)


@pytest.fixture
def cycle_pipeline():
    """Pipeline double that reports every gym as updated."""
    pipeline = Mock()
    pipeline.run = AsyncMock(
        side_effect=lambda repository, gyms, strategy: UpdateCycleStats(
            total=len(gyms), success_count=len(gyms)
        )
    )
    return pipeline


@pytest.fixture
def app_container(gym_store, fake_clock, fake_timer, cycle_pipeline):
    """Container whose schedulers run on fakes."""

    def factory(store, config):
        return AutoUpdateScheduler(
            store=store,
            config=config,
            gate=PreRunGate(StalenessOracle(stale_after_days=3, now=fake_clock.now)),
            pipeline=cycle_pipeline,
            timer=fake_timer,
            clock=fake_clock,
        )

    return AppContainer(
        app_settings=Settings(_env_file=None),
        store=gym_store,
        scheduler_factory=factory,
    )
