"""
Django management command to issue a license to a new customer.
"""

from core.management.service_command import ServiceCommand
from licenses.application.commands.issue_customer import IssueCustomerCommand
from licenses.application.handlers.issue_customer_handler import IssueCustomerHandler
from licenses.application.services.customer_document import customer_to_dict


class Command(ServiceCommand):
    """Command to issue a customer license."""

    help = "Issue a license key to a new customer"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("name", type=str, help="Customer name")
        parser.add_argument("email", type=str, help="Customer email")
        parser.add_argument(
            "--months",
            type=str,
            default=None,
            help="License duration in months (default: 6)",
        )
        parser.add_argument(
            "--max-devices",
            type=str,
            default=None,
            help="Maximum number of activated devices (default: 2)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = IssueCustomerHandler(self.get_repository())
        customer = self.run(
            handler.handle(
                IssueCustomerCommand(
                    name=options["name"],
                    email=options["email"],
                    months=options["months"],
                    max_devices=options["max_devices"],
                )
            )
        )
        self.emit(customer_to_dict(customer))
