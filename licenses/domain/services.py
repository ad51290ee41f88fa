"""
License domain services.

The license state machine: device admission (activate) and the recurring
liveness check (verify). Both are pure functions of a customer record, a
device id and the current time, returning the record to persist and the
outcome. A rejected request returns the record unchanged, so nothing is
written.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from core.domain.value_objects import ActivationOutcome, LicenseStatus
from licenses.domain.customer import Customer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    """Outcome of a state machine transition."""

    outcome: ActivationOutcome
    device_id: str
    newly_activated: bool = False


class LicenseStateMachine:
    """Domain service for activation and verification transitions."""

    @staticmethod
    def activate(customer: Customer, device_id: str, now: datetime) -> Tuple[Customer, Decision]:
        """
        Admit a device to a license.

        Re-activating an already activated device refreshes it and does not
        count against max_devices again.

        Args:
            customer: Current record
            device_id: Device requesting activation
            now: Current time

        Returns:
            Tuple of (record to persist, decision)
        """
        if customer.banned:
            return customer, Decision(ActivationOutcome.BANNED, device_id)

        if customer.is_expired(now):
            return (
                customer.with_status(LicenseStatus.EXPIRED),
                Decision(ActivationOutcome.EXPIRED, device_id),
            )

        activations = customer.activations
        newly_activated = device_id not in activations
        if newly_activated:
            if not activations.has_capacity(customer.max_devices):
                logger.info(
                    "Device limit %d reached for customer %s",
                    customer.max_devices,
                    customer.id,
                )
                return customer, Decision(ActivationOutcome.LIMIT_EXCEEDED, device_id)
            activations = activations.add(device_id, now)
        else:
            activations = activations.touch(device_id, now)

        updated = customer.with_activations(activations).with_status(LicenseStatus.ACTIVE)
        return updated, Decision(ActivationOutcome.ACTIVE, device_id, newly_activated)

    @staticmethod
    def verify(customer: Customer, device_id: str, now: datetime) -> Tuple[Customer, Decision]:
        """
        Check an activated device's license.

        Verification never activates a device. For an activated device it
        refreshes last_seen and recomputes the status, ban first.

        Args:
            customer: Current record
            device_id: Device being checked
            now: Current time

        Returns:
            Tuple of (record to persist, decision)
        """
        if device_id not in customer.activations:
            return customer, Decision(ActivationOutcome.NOT_ACTIVATED, device_id)

        updated = customer.with_activations(
            customer.activations.touch(device_id, now)
        ).refresh_status(now)
        return updated, Decision(ActivationOutcome.from_status(updated.status), device_id)

    @staticmethod
    def refresh(customer: Customer, now: datetime) -> Tuple[Customer, bool]:
        """
        Bring the stored status in line with the status rule.

        Returns:
            Tuple of (record to persist, whether the status changed)
        """
        updated = customer.refresh_status(now)
        return updated, updated.status != customer.status
