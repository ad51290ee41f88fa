"""
ListCustomersHandler.

Handler for listing customer records.
"""
from typing import List

from licenses.application.queries.list_customers import ListCustomersQuery
from licenses.domain.customer import Customer
from licenses.ports.customer_repository import CustomerRepository


class ListCustomersHandler:
    """Handler for ListCustomersQuery."""

    def __init__(self, customer_repository: CustomerRepository):
        """Initialize handler with repository."""
        self.customer_repository = customer_repository

    async def handle(self, query: ListCustomersQuery) -> List[Customer]:
        """
        Handle list customers query.

        Stored statuses are returned as persisted.

        Args:
            query: ListCustomersQuery

        Returns:
            List of Customer records in creation order
        """
        return await self.customer_repository.list_all()
