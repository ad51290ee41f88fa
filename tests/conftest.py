"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.infrastructure.events import event_bus
from licenses.domain.customer import Customer
from licenses.infrastructure.repositories.django_customer_repository import (
    DjangoCustomerRepository,
)
from licenses.infrastructure.repositories.in_memory_customer_repository import (
    InMemoryCustomerRepository,
)

START = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable clock for handlers."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> datetime:
        self.now = now
        return self.now


@pytest.fixture
def clock():
    """Fixture for a clock frozen at START."""
    return FakeClock()


@pytest.fixture
def customer_repository():
    """Fixture for the in-memory CustomerRepository."""
    return InMemoryCustomerRepository(lock_timeout=1.0, max_retries=2, retry_backoff=0.001)


@pytest.fixture
def django_customer_repository():
    """Fixture for the Django CustomerRepository."""
    return DjangoCustomerRepository()


@pytest.fixture
def sample_customer():
    """Fixture for a sample active Customer issued at START."""
    return Customer.issue(
        name="Ada Lovelace",
        email="ada@example.com",
        now=START,
        months=6,
        max_devices=2,
        customer_id="cust_sample000001",
        license_key="LIC-AAAA-BBBB-CCCC-DDDD",
    )


@pytest.fixture(autouse=True)
def isolated_event_bus():
    """Start and finish every test with no event subscriptions."""
    event_bus.clear()
    yield event_bus
    event_bus.clear()


class RecordingHandler:
    """Event handler that keeps every event it receives."""

    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


@pytest.fixture
def recorded_events(isolated_event_bus):
    """Fixture subscribing a recorder to every audited event type."""
    from core.infrastructure.event_handlers import AUDITED_EVENTS

    recorder = RecordingHandler()
    for event_type in AUDITED_EVENTS:
        isolated_event_bus.subscribe(event_type, recorder)
    return recorder.events
