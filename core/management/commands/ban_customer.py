"""
Django management command to ban or unban a customer.
"""

from core.management.service_command import ServiceCommand
from licenses.application.commands.ban_customer import BanCustomerCommand
from licenses.application.handlers.customer_lifecycle_handlers import BanCustomerHandler
from licenses.application.services.customer_document import customer_to_dict


class Command(ServiceCommand):
    """Command to ban or unban a license."""

    help = "Ban a customer's license, or lift the ban with --unban"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("customer_id", type=str, help="Customer id")
        parser.add_argument(
            "--unban",
            action="store_true",
            help="Lift the ban instead of setting it",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = BanCustomerHandler(self.get_repository())
        customer = self.run(
            handler.handle(
                BanCustomerCommand(customer_id=options["customer_id"], banned=not options["unban"])
            )
        )
        self.emit(customer_to_dict(customer))
