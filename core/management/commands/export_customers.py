"""
Django management command to export the customer collection as JSON.
"""

import json

from core.management.service_command import ServiceCommand
from licenses.application.handlers.list_customers_handler import ListCustomersHandler
from licenses.application.queries.list_customers import ListCustomersQuery
from licenses.application.services.customer_document import dump_document


class Command(ServiceCommand):
    """Command to export customers."""

    help = "Export every customer record as a JSON document"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--output",
            type=str,
            default=None,
            help="File to write (default: stdout)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = ListCustomersHandler(self.get_repository())
        document = dump_document(self.run(handler.handle(ListCustomersQuery())))

        output = options["output"]
        if not output:
            self.emit(document)
            return

        with open(output, "w", encoding="utf-8") as handle:
            json.dump(document, handle, indent=2)
        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"Exported {len(document['customers'])} customer(s) to {output}")
        )
