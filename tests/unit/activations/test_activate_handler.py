"""
Unit tests for ActivateLicenseHandler.
"""

from datetime import timedelta

import pytest

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.domain.events import LicenseActivated
from core.domain.exceptions import InvalidLicenseKeyError, ValidationError
from core.domain.value_objects import ActivationOutcome, LicenseStatus

KEY = "LIC-AAAA-BBBB-CCCC-DDDD"


@pytest.mark.asyncio
class TestActivateLicenseHandler:
    """Tests for ActivateLicenseHandler."""

    async def test_activate(self, customer_repository, sample_customer, clock, recorded_events):
        """Test a successful activation."""
        await customer_repository.add(sample_customer)
        handler = ActivateLicenseHandler(customer_repository, clock=clock)

        result = await handler.handle(ActivateLicenseCommand(license_key=KEY, device_id="laptop"))

        assert result.outcome is ActivationOutcome.ACTIVE
        assert result.is_active is True
        assert result.to_dict() == {
            "status": "active",
            "expiresAt": "2024-07-15T12:00:00.000000Z",
            "deviceId": "laptop",
            "customerName": "Ada Lovelace",
        }
        stored = await customer_repository.find_by_id(sample_customer.id)
        assert "laptop" in stored.activations

        assert len(recorded_events) == 1
        assert isinstance(recorded_events[0], LicenseActivated)
        assert recorded_events[0].devices_in_use == 1

    async def test_reactivate_publishes_nothing(
        self, customer_repository, sample_customer, clock, recorded_events
    ):
        """Test re-activating a known device is not a new activation."""
        await customer_repository.add(sample_customer)
        handler = ActivateLicenseHandler(customer_repository, clock=clock)
        command = ActivateLicenseCommand(license_key=KEY, device_id="laptop")

        await handler.handle(command)
        clock.advance(hours=2)
        result = await handler.handle(command)

        assert result.outcome is ActivationOutcome.ACTIVE
        assert len(recorded_events) == 1
        stored = await customer_repository.find_by_id(sample_customer.id)
        assert stored.activations.find("laptop").last_seen == clock.now

    async def test_limit_exceeded(self, customer_repository, sample_customer, clock):
        """Test a third device on a two-device license."""
        await customer_repository.add(sample_customer)
        handler = ActivateLicenseHandler(customer_repository, clock=clock)
        for device in ("a", "b"):
            await handler.handle(ActivateLicenseCommand(license_key=KEY, device_id=device))

        result = await handler.handle(ActivateLicenseCommand(license_key=KEY, device_id="c"))

        assert result.outcome is ActivationOutcome.LIMIT_EXCEEDED
        assert result.to_dict() == {"status": "limit_exceeded", "maxDevices": 2}
        stored = await customer_repository.find_by_id(sample_customer.id)
        assert [activation.device_id for activation in stored.activations] == ["a", "b"]

    async def test_expired(self, customer_repository, sample_customer, clock):
        """Test activation after expiry stores and reports expired."""
        await customer_repository.add(sample_customer)
        clock.set(sample_customer.expires_at + timedelta(days=1))
        handler = ActivateLicenseHandler(customer_repository, clock=clock)

        result = await handler.handle(ActivateLicenseCommand(license_key=KEY, device_id="laptop"))

        assert result.to_dict() == {"status": "expired", "expiresAt": "2024-07-15T12:00:00.000000Z"}
        stored = await customer_repository.find_by_id(sample_customer.id)
        assert stored.status == LicenseStatus.EXPIRED
        assert len(stored.activations) == 0

    async def test_banned(self, customer_repository, sample_customer, clock):
        """Test activation of a banned license."""
        await customer_repository.add(sample_customer.set_banned(True, clock.now))
        handler = ActivateLicenseHandler(customer_repository, clock=clock)

        result = await handler.handle(ActivateLicenseCommand(license_key=KEY, device_id="laptop"))

        assert result.to_dict() == {"status": "banned"}
        assert result.is_active is False

    async def test_unknown_key(self, customer_repository, clock):
        """Test an unknown key is an error."""
        handler = ActivateLicenseHandler(customer_repository, clock=clock)

        with pytest.raises(InvalidLicenseKeyError) as exc_info:
            await handler.handle(ActivateLicenseCommand(license_key="LIC-NOPE", device_id="x"))
        assert exc_info.value.code == "INVALID_LICENSE"

    @pytest.mark.parametrize(
        "license_key, device_id", [("", "laptop"), (KEY, ""), (None, None), (KEY, "d" * 256)]
    )
    async def test_invalid_request(self, customer_repository, clock, license_key, device_id):
        """Test missing or malformed inputs are rejected."""
        handler = ActivateLicenseHandler(customer_repository, clock=clock)

        with pytest.raises(ValidationError):
            await handler.handle(
                ActivateLicenseCommand(license_key=license_key, device_id=device_id)
            )
