"""
VerifyLicenseHandler.

Handler for the recurring license check of an activated device.
"""

import logging
from datetime import datetime
from typing import Callable

from activations.application.commands.verify_license import VerifyLicenseCommand
from activations.application.dto.activation_dto import VerificationResultDTO
from activations.application.handlers.activate_license_handler import validate_device_request
from core.domain.exceptions import InvalidLicenseKeyError
from core.domain.value_objects import ActivationOutcome
from core.metrics import verifications_total
from licenses.domain.expiry import utc_now
from licenses.domain.services import LicenseStateMachine
from licenses.ports.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class VerifyLicenseHandler:
    """Handler for VerifyLicenseCommand."""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize handler with repository and clock."""
        self.customer_repository = customer_repository
        self.clock = clock

    async def handle(self, command: VerifyLicenseCommand) -> VerificationResultDTO:
        """
        Handle verify license command.

        Args:
            command: VerifyLicenseCommand

        Returns:
            VerificationResultDTO with the current status, or the
            not_activated outcome for an unknown device

        Raises:
            ValidationError: If the key or device id is missing
            InvalidLicenseKeyError: If the license key is unknown
        """
        validate_device_request(command.license_key, command.device_id)

        customer = await self.customer_repository.find_by_license_key(command.license_key)
        if not customer:
            verifications_total.labels(outcome="invalid").inc()
            raise InvalidLicenseKeyError("Invalid license key")

        customer, decision = await self.customer_repository.update(
            customer.id,
            lambda current: LicenseStateMachine.verify(current, command.device_id, self.clock()),
        )

        verifications_total.labels(outcome=decision.outcome.value).inc()
        logger.debug(
            "Verification of %s... on device %s: %s",
            command.license_key[:8],
            command.device_id,
            decision.outcome.value,
        )

        if decision.outcome is ActivationOutcome.NOT_ACTIVATED:
            return VerificationResultDTO(outcome=decision.outcome)

        return VerificationResultDTO(outcome=decision.outcome, expires_at=customer.expires_at)
