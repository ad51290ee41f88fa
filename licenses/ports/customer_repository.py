"""
Customer repository port (interface).

This defines the contract for customer record persistence.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple, TypeVar

from licenses.domain.customer import Customer

T = TypeVar("T")

Mutator = Callable[[Customer], Tuple[Customer, T]]


def check_identity(current: Customer, updated: Customer) -> None:
    """
    Reject a mutation that changes a record's immutable fields.

    Raises:
        ValueError: If id, license key, max_devices or created_at changed
    """
    for attribute in ("id", "license_key", "max_devices", "created_at"):
        if getattr(current, attribute) != getattr(updated, attribute):
            raise ValueError(f"Customer {attribute} is immutable")


class CustomerRepository(ABC):
    """
    Abstract repository for Customer records.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.

    update() is the only way to change a stored record. Implementations
    must run its read, mutator call and write as one atomic unit with
    respect to other updates of the same record, bound the time spent
    waiting for that record, and leave the record untouched when the
    mutator raises.
    """

    @abstractmethod
    async def add(self, customer: Customer) -> Customer:
        """
        Store a new customer record.

        Args:
            customer: Customer record to add

        Returns:
            Stored customer record

        Raises:
            DuplicateCustomerError: If the id or license key is taken
        """
        pass

    @abstractmethod
    async def update(self, customer_id: str, mutator: Mutator) -> Tuple[Customer, T]:
        """
        Atomically read, transform and write back one customer record.

        The mutator receives the current record and returns the record to
        store plus a result value. If the returned record equals the
        current one nothing is written.

        Args:
            customer_id: Customer id
            mutator: Pure transition to apply

        Returns:
            Tuple of (stored record, mutator result)

        Raises:
            CustomerNotFoundError: If no record has this id
            StoreContentionError: If the record stayed locked past the
                timeout on every retry
        """
        pass

    @abstractmethod
    async def find_by_id(self, customer_id: str) -> Optional[Customer]:
        """
        Find a customer by id.

        Args:
            customer_id: Customer id

        Returns:
            Customer record or None if not found
        """
        pass

    @abstractmethod
    async def find_by_license_key(self, license_key: str) -> Optional[Customer]:
        """
        Find a customer by license key.

        Args:
            license_key: License key

        Returns:
            Customer record or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Customer]:
        """
        List every customer record in creation order.

        Returns:
            List of Customer records
        """
        pass
