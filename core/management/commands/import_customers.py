"""
Django management command to import a customer document.
"""

import json

from django.core.management.base import CommandError

from core.management.service_command import ServiceCommand
from licenses.application.handlers.import_customers_handler import ImportCustomersHandler


class Command(ServiceCommand):
    """Command to import customers."""

    help = "Import customer records from a JSON document, skipping existing ones"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("path", type=str, help="JSON document to import")

    def handle(self, *args, **options):
        """Execute the command."""
        path = options["path"]
        try:
            with open(path, encoding="utf-8") as handle:
                document = json.load(handle)
        except OSError as exc:
            raise CommandError(f"Cannot read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CommandError(f"{path} is not valid JSON: {exc}") from exc

        handler = ImportCustomersHandler(self.get_repository())
        report = self.run(handler.handle(document))
        self.emit(report.to_dict())
