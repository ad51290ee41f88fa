"""
Django management command to renew a customer's license.
"""

from core.management.service_command import ServiceCommand
from licenses.application.commands.renew_customer import RenewCustomerCommand
from licenses.application.handlers.customer_lifecycle_handlers import RenewCustomerHandler
from licenses.application.services.customer_document import customer_to_dict


class Command(ServiceCommand):
    """Command to renew a license."""

    help = "Extend a customer's license expiry"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("customer_id", type=str, help="Customer id")
        parser.add_argument(
            "--months",
            type=str,
            default=None,
            help="Months to add (default: 3)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = RenewCustomerHandler(self.get_repository())
        customer = self.run(
            handler.handle(
                RenewCustomerCommand(customer_id=options["customer_id"], months=options["months"])
            )
        )
        self.emit(customer_to_dict(customer))
