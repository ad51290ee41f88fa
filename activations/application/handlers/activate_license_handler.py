"""
ActivateLicenseHandler.

Handler for admitting a device to a license.
"""

import logging
from datetime import datetime
from typing import Callable

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivationResultDTO
from activations.domain.events import LicenseActivated
from core.domain.exceptions import InvalidLicenseKeyError, ValidationError
from core.domain.value_objects import ActivationOutcome, DeviceId
from core.infrastructure.events import event_bus
from core.metrics import activation_attempts_total
from licenses.domain.expiry import utc_now
from licenses.domain.services import LicenseStateMachine
from licenses.ports.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


def validate_device_request(license_key: str, device_id: str) -> None:
    """
    Check that a device request carries a key and a usable device id.

    Raises:
        ValidationError: If either is missing or the device id is malformed
    """
    if not license_key or not device_id:
        raise ValidationError("licenseKey and deviceId required")
    try:
        DeviceId(device_id)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize handler with repository and clock."""
        self.customer_repository = customer_repository
        self.clock = clock

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        """
        Handle activate license command.

        Banned, expired and device-limit rejections are returned as
        outcomes on the result, not raised.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResultDTO with the outcome

        Raises:
            ValidationError: If the key or device id is missing
            InvalidLicenseKeyError: If the license key is unknown
        """
        validate_device_request(command.license_key, command.device_id)

        customer = await self.customer_repository.find_by_license_key(command.license_key)
        if not customer:
            activation_attempts_total.labels(outcome="invalid").inc()
            raise InvalidLicenseKeyError("Invalid license key")

        customer, decision = await self.customer_repository.update(
            customer.id,
            lambda current: LicenseStateMachine.activate(
                current, command.device_id, self.clock()
            ),
        )

        activation_attempts_total.labels(outcome=decision.outcome.value).inc()
        logger.info(
            "Activation of %s... on device %s: %s",
            command.license_key[:8],
            command.device_id,
            decision.outcome.value,
        )

        if decision.outcome is ActivationOutcome.BANNED:
            return ActivationResultDTO(outcome=decision.outcome)
        if decision.outcome is ActivationOutcome.EXPIRED:
            return ActivationResultDTO(outcome=decision.outcome, expires_at=customer.expires_at)
        if decision.outcome is ActivationOutcome.LIMIT_EXCEEDED:
            return ActivationResultDTO(outcome=decision.outcome, max_devices=customer.max_devices)

        if decision.newly_activated:
            await event_bus.publish(
                LicenseActivated(
                    customer_id=customer.id,
                    device_id=command.device_id,
                    devices_in_use=len(customer.activations),
                )
            )

        return ActivationResultDTO(
            outcome=decision.outcome,
            expires_at=customer.expires_at,
            device_id=command.device_id,
            customer_name=customer.name,
        )
