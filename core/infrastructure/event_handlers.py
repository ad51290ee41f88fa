"""
Event handlers for domain events.

These handlers process domain events for side effects like audit logging.
"""

import logging

from activations.domain.events import LicenseActivated
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import event_bus
from licenses.domain.events import CustomerIssued, LicenseBanChanged, LicenseRenewed

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (CustomerIssued, LicenseRenewed, LicenseBanChanged, LicenseActivated)

_registered = False


class AuditLogEventHandler(EventHandler):
    """Writes every audited domain event to the audit logger."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


def register_event_handlers(bus=None) -> None:
    """
    Subscribe the audit log handler to every audited event type.

    Registration against the global bus happens once per process.

    Args:
        bus: Event bus to register on (defaults to the global bus)
    """
    global _registered  # pylint: disable=global-statement

    if bus is None:
        if _registered:
            return
        bus = event_bus
        _registered = True

    handler = AuditLogEventHandler()
    for event_type in AUDITED_EVENTS:
        bus.subscribe(event_type, handler)

    logger.info("Registered audit log handler for %d event type(s)", len(AUDITED_EVENTS))
