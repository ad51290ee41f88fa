"""
Django management command to list customer records.
"""

from core.management.service_command import ServiceCommand
from licenses.application.handlers.list_customers_handler import ListCustomersHandler
from licenses.application.queries.list_customers import ListCustomersQuery
from licenses.application.services.customer_document import customer_to_dict


class Command(ServiceCommand):
    """Command to list customers."""

    help = "List every customer record with its stored status"

    def handle(self, *args, **options):
        """Execute the command."""
        handler = ListCustomersHandler(self.get_repository())
        customers = self.run(handler.handle(ListCustomersQuery()))
        self.emit([customer_to_dict(customer) for customer in customers])
