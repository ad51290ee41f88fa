"""
Django management command to bring stored license statuses up to date.

This command should be run periodically (e.g., via cron or scheduled task).
Licenses nobody activates or verifies keep their last stored status until
this sweep rewrites it.
"""

import logging

from core.management.service_command import ServiceCommand
from licenses.application.handlers.customer_lifecycle_handlers import (
    RefreshCustomerStatusesHandler,
)

logger = logging.getLogger(__name__)


class Command(ServiceCommand):
    """Command to refresh stale license statuses."""

    help = "Rewrite stored statuses that no longer match expiry and ban state"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = RefreshCustomerStatusesHandler(self.get_repository())

        if options["dry_run"]:
            stale = self.run(handler.find_stale())
            self.stdout.write(f"Found {len(stale)} stale license status(es)")
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for customer in stale[:10]:  # Show first 10
                self.stdout.write(
                    f"  - Customer {customer.id} stored {customer.status.value}, "
                    f"expires at {customer.expires_at.isoformat()}"
                )
            return

        report = self.run(handler.handle())
        self.stdout.write(f"Found {report.stale} stale license status(es)")
        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"Successfully refreshed {len(report.updated)} license status(es)")
        )
