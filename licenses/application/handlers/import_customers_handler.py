"""
ImportCustomersHandler.

Handler for loading a customer document into the store.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from core.domain.exceptions import DuplicateCustomerError
from licenses.application.services.customer_document import load_document
from licenses.ports.customer_repository import CustomerRepository

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """Counts of an import run."""

    imported: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "imported": len(self.imported),
            "skipped": len(self.skipped),
            "skippedIds": self.skipped,
        }


class ImportCustomersHandler:
    """Adds the customers of a document, keeping records that already exist."""

    def __init__(self, customer_repository: CustomerRepository):
        """Initialize handler with repository."""
        self.customer_repository = customer_repository

    async def handle(self, document: Dict[str, Any]) -> ImportReport:
        """
        Import a customer document.

        The whole document is validated before anything is written.

        Args:
            document: Document in the export layout

        Returns:
            ImportReport with imported and skipped customer ids

        Raises:
            ValidationError: If the document or a record is malformed
        """
        customers = load_document(document)
        report = ImportReport()
        for customer in customers:
            try:
                await self.customer_repository.add(customer)
            except DuplicateCustomerError:
                logger.info("Skipping customer %s: id or license key already exists", customer.id)
                report.skipped.append(customer.id)
            else:
                report.imported.append(customer.id)

        logger.info(
            "Imported %d customer(s), skipped %d", len(report.imported), len(report.skipped)
        )
        return report
