"""
Customer lifecycle handlers.

Handlers for renew, ban/unban, and the stored-status refresh.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List

from core.domain.exceptions import ValidationError
from core.infrastructure.events import event_bus
from core.metrics import license_ban_changes_total, licenses_renewed_total
from licenses.application.commands.ban_customer import BanCustomerCommand
from licenses.application.commands.renew_customer import RenewCustomerCommand
from licenses.domain.customer import DEFAULT_RENEW_MONTHS, Customer, coerce_positive_int
from licenses.domain.events import LicenseBanChanged, LicenseRenewed
from licenses.domain.expiry import utc_now
from licenses.domain.services import LicenseStateMachine
from licenses.ports.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


class RenewCustomerHandler:
    """Handler for RenewCustomerCommand."""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize handler with repository and clock."""
        self.customer_repository = customer_repository
        self.clock = clock

    async def handle(self, command: RenewCustomerCommand) -> Customer:
        """
        Handle renew customer command.

        Args:
            command: RenewCustomerCommand

        Returns:
            Renewed Customer record

        Raises:
            CustomerNotFoundError: If customer not found
            ValidationError: If months pushes the expiry out of range
        """
        months = coerce_positive_int(command.months, DEFAULT_RENEW_MONTHS)

        def renew(customer: Customer):
            try:
                renewed = customer.renew(months, self.clock())
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            return renewed, customer.expires_at

        renewed, previous_expiration = await self.customer_repository.update(
            command.customer_id, renew
        )

        licenses_renewed_total.inc()
        logger.info(
            "Renewed customer %s by %d month(s): %s -> %s",
            renewed.id,
            months,
            previous_expiration.isoformat(),
            renewed.expires_at.isoformat(),
        )

        await event_bus.publish(
            LicenseRenewed(
                customer_id=renewed.id,
                previous_expiration=previous_expiration,
                new_expiration=renewed.expires_at,
            )
        )

        return renewed


class BanCustomerHandler:
    """Handler for BanCustomerCommand."""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize handler with repository and clock."""
        self.customer_repository = customer_repository
        self.clock = clock

    async def handle(self, command: BanCustomerCommand) -> Customer:
        """
        Handle ban customer command.

        Args:
            command: BanCustomerCommand

        Returns:
            Updated Customer record

        Raises:
            CustomerNotFoundError: If customer not found
        """
        banned = bool(command.banned)
        customer, _ = await self.customer_repository.update(
            command.customer_id,
            lambda current: (current.set_banned(banned, self.clock()), None),
        )

        license_ban_changes_total.labels(banned=str(banned).lower()).inc()
        logger.info(
            "%s customer %s, status now %s",
            "Banned" if banned else "Unbanned",
            customer.id,
            customer.status.value,
        )

        await event_bus.publish(
            LicenseBanChanged(
                customer_id=customer.id,
                banned=customer.banned,
                status=customer.status.value,
            )
        )

        return customer


@dataclass
class StatusRefreshReport:
    """Result of a stored-status refresh run."""

    stale: int
    updated: List[Customer]


class RefreshCustomerStatusesHandler:
    """
    Rewrites stored statuses that no longer match the status rule.

    Licenses that nobody activates or verifies keep their last stored
    status; this brings them up to date (typically active -> expired).
    """

    def __init__(
        self,
        customer_repository: CustomerRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize handler with repository and clock."""
        self.customer_repository = customer_repository
        self.clock = clock

    async def find_stale(self) -> List[Customer]:
        """Return customers whose stored status differs from their effective status."""
        now = self.clock()
        return [
            customer
            for customer in await self.customer_repository.list_all()
            if customer.status != customer.effective_status(now)
        ]

    async def handle(self) -> StatusRefreshReport:
        """
        Refresh every stale stored status.

        Each record is re-read under its lock, so a concurrent transition
        is never overwritten with an older view.

        Returns:
            StatusRefreshReport with the records that changed
        """
        stale = await self.find_stale()
        updated = []
        for customer in stale:
            refreshed, changed = await self.customer_repository.update(
                customer.id,
                lambda current: LicenseStateMachine.refresh(current, self.clock()),
            )
            if changed:
                updated.append(refreshed)
                logger.info(
                    "Refreshed status of customer %s to %s", refreshed.id, refreshed.status.value
                )
        return StatusRefreshReport(stale=len(stale), updated=updated)
