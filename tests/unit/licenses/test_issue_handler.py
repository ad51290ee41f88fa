"""
Unit tests for IssueCustomerHandler.
"""

from datetime import datetime, timezone

import pytest

from core.domain.exceptions import DuplicateCustomerError, ValidationError
from core.domain.value_objects import LicenseStatus
from licenses.application.commands.issue_customer import IssueCustomerCommand
from licenses.application.handlers.issue_customer_handler import IssueCustomerHandler
from licenses.domain.events import CustomerIssued


class SequenceKeys:
    """Key generator returning a fixed sequence."""

    def __init__(self, *keys):
        self.keys = list(keys)
        self.calls = 0

    def __call__(self):
        key = self.keys[min(self.calls, len(self.keys) - 1)]
        self.calls += 1
        return key


@pytest.mark.asyncio
class TestIssueCustomerHandler:
    """Tests for IssueCustomerHandler."""

    async def test_issue_with_defaults(self, customer_repository, clock, recorded_events):
        """Test issuing with the default duration and device cap."""
        handler = IssueCustomerHandler(customer_repository, clock=clock)

        customer = await handler.handle(
            IssueCustomerCommand(name="Ada Lovelace", email="ada@example.com")
        )

        assert customer.status == LicenseStatus.ACTIVE
        assert customer.max_devices == 2
        assert customer.created_at == clock.now
        assert customer.expires_at == datetime(2024, 7, 15, 12, tzinfo=timezone.utc)
        assert await customer_repository.find_by_license_key(customer.license_key) == customer

        assert len(recorded_events) == 1
        assert isinstance(recorded_events[0], CustomerIssued)
        assert recorded_events[0].customer_id == customer.id

    async def test_issue_with_values(self, customer_repository, clock):
        """Test issuing with explicit months and devices."""
        handler = IssueCustomerHandler(customer_repository, clock=clock)

        customer = await handler.handle(
            IssueCustomerCommand(
                name="Ada", email="ada@example.com", months="12", max_devices=5
            )
        )

        assert customer.max_devices == 5
        assert customer.expires_at == datetime(2025, 1, 15, 12, tzinfo=timezone.utc)

    @pytest.mark.parametrize("months, max_devices", [(0, -3), ("x", 1.5), (True, None)])
    async def test_invalid_numbers_use_defaults(
        self, customer_repository, clock, months, max_devices
    ):
        """Test invalid numeric input falls back to the defaults."""
        handler = IssueCustomerHandler(customer_repository, clock=clock)

        customer = await handler.handle(
            IssueCustomerCommand(
                name="Ada", email="ada@example.com", months=months, max_devices=max_devices
            )
        )

        assert customer.max_devices == 2
        assert customer.expires_at == datetime(2024, 7, 15, 12, tzinfo=timezone.utc)

    async def test_strips_name_and_email(self, customer_repository, clock):
        """Test surrounding whitespace is removed."""
        handler = IssueCustomerHandler(customer_repository, clock=clock)

        customer = await handler.handle(
            IssueCustomerCommand(name="  Ada  ", email=" ada@example.com\n")
        )

        assert customer.name == "Ada"
        assert customer.email == "ada@example.com"

    async def test_months_out_of_range(self, customer_repository, clock):
        """Test a duration past the supported years is a validation error."""
        handler = IssueCustomerHandler(customer_repository, clock=clock)

        with pytest.raises(ValidationError, match="out of range"):
            await handler.handle(
                IssueCustomerCommand(name="A", email="a@x.com", months="200000")
            )

        assert await customer_repository.list_all() == []

    @pytest.mark.parametrize(
        "name, email", [("", "ada@example.com"), ("Ada", ""), ("   ", "a@b.c"), (None, None)]
    )
    async def test_missing_fields(self, customer_repository, clock, name, email):
        """Test name and email are required and nothing is stored."""
        handler = IssueCustomerHandler(customer_repository, clock=clock)

        with pytest.raises(ValidationError):
            await handler.handle(IssueCustomerCommand(name=name, email=email))

        assert await customer_repository.list_all() == []

    async def test_key_collision_is_retried(self, customer_repository, clock):
        """Test a colliding key is regenerated."""
        keys = SequenceKeys("LIC-AAAA-AAAA-AAAA-AAAA", "LIC-AAAA-AAAA-AAAA-AAAA", "LIC-BBBB")
        handler = IssueCustomerHandler(customer_repository, clock=clock, key_generator=keys)

        first = await handler.handle(IssueCustomerCommand(name="Ada", email="a@example.com"))
        second = await handler.handle(IssueCustomerCommand(name="Bob", email="b@example.com"))

        assert first.license_key == "LIC-AAAA-AAAA-AAAA-AAAA"
        assert second.license_key == "LIC-BBBB"
        assert keys.calls == 3

    async def test_gives_up_after_repeated_collisions(self, customer_repository, clock):
        """Test DuplicateCustomerError surfaces when every key collides."""
        keys = SequenceKeys("LIC-AAAA-AAAA-AAAA-AAAA")
        handler = IssueCustomerHandler(customer_repository, clock=clock, key_generator=keys)
        await handler.handle(IssueCustomerCommand(name="Ada", email="a@example.com"))

        with pytest.raises(DuplicateCustomerError):
            await handler.handle(IssueCustomerCommand(name="Bob", email="b@example.com"))

        assert keys.calls == 1 + handler.max_attempts
        assert len(await customer_repository.list_all()) == 1

    async def test_keys_are_unique(self, customer_repository, clock):
        """Test issued keys never repeat."""
        handler = IssueCustomerHandler(customer_repository, clock=clock)

        customers = [
            await handler.handle(IssueCustomerCommand(name=f"C{i}", email=f"c{i}@example.com"))
            for i in range(25)
        ]

        assert len({customer.license_key for customer in customers}) == 25
        assert len({customer.id for customer in customers}) == 25
