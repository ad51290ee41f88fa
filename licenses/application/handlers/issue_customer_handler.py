"""
IssueCustomerHandler.

Handles the issue customer command.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from core.config import get_store_settings
from core.domain.exceptions import DuplicateCustomerError, ValidationError
from core.infrastructure.events import event_bus
from core.metrics import customers_issued_total
from licenses.application.commands.issue_customer import IssueCustomerCommand
from licenses.domain.customer import (
    DEFAULT_ISSUE_MONTHS,
    DEFAULT_MAX_DEVICES,
    Customer,
    coerce_positive_int,
)
from licenses.domain.events import CustomerIssued
from licenses.domain.expiry import utc_now
from licenses.domain.license_key import generate_license_key
from licenses.ports.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class IssueCustomerHandler:
    """Handler for IssueCustomerCommand."""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        clock: Callable[[], datetime] = utc_now,
        key_generator: Optional[Callable[[], str]] = None,
    ):
        """Initialize handler with repository, clock and key generator."""
        store_settings = get_store_settings()
        self.customer_repository = customer_repository
        self.clock = clock
        self.key_generator = key_generator or (
            lambda: generate_license_key(store_settings["KEY_PREFIX"])
        )
        self.max_attempts = max(1, int(store_settings["KEY_GENERATION_ATTEMPTS"]))

    async def handle(self, command: IssueCustomerCommand) -> Customer:
        """
        Handle issue customer command.

        Args:
            command: IssueCustomerCommand

        Returns:
            The stored Customer record, including its license key

        Raises:
            ValidationError: If name or email is missing, or months is out of range
            DuplicateCustomerError: If every generated key collided
        """
        name = (command.name or "").strip()
        email = (command.email or "").strip()
        if not name or not email:
            raise ValidationError("name and email required")

        months = coerce_positive_int(command.months, DEFAULT_ISSUE_MONTHS)
        max_devices = coerce_positive_int(command.max_devices, DEFAULT_MAX_DEVICES)

        for attempt in range(1, self.max_attempts + 1):
            try:
                customer = Customer.issue(
                    name=name,
                    email=email,
                    now=self.clock(),
                    months=months,
                    max_devices=max_devices,
                    license_key=self.key_generator(),
                )
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            try:
                saved = await self.customer_repository.add(customer)
                break
            except DuplicateCustomerError:
                logger.warning(
                    "Generated id or key collided (attempt %d/%d)", attempt, self.max_attempts
                )
                if attempt == self.max_attempts:
                    raise

        customers_issued_total.inc()
        logger.info(
            "Issued license %s... to customer %s (expires %s, %d device(s))",
            saved.license_key[:8],
            saved.id,
            saved.expires_at.isoformat(),
            saved.max_devices,
        )

        await event_bus.publish(
            CustomerIssued(
                customer_id=saved.id,
                expires_at=saved.expires_at,
                max_devices=saved.max_devices,
            )
        )

        return saved
