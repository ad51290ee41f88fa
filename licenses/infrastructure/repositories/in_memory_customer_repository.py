"""
In-process implementation of CustomerRepository port.

Keeps records in a dict. Used for tests and single-process tools; the
Django adapter is the durable store.
"""

import logging
from typing import Dict, List, Optional, Tuple

from core.config import get_store_settings
from core.domain.exceptions import CustomerNotFoundError, DuplicateCustomerError
from core.infrastructure.database import retry_on_contention
from core.infrastructure.locks import KeyedLockTable
from core.metrics import store_update_duration_seconds
from licenses.domain.customer import Customer
from licenses.ports.customer_repository import CustomerRepository, Mutator, T, check_identity

logger = logging.getLogger(__name__)


class InMemoryCustomerRepository(CustomerRepository):
    """
    In-memory CustomerRepository.

    Records are immutable entities, so stored values are never shared
    mutable state; the lock table serializes updates per customer id.
    """

    def __init__(
        self,
        locks: Optional[KeyedLockTable] = None,
        lock_timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ):
        """Initialize repository with empty storage and its own lock table."""
        store_settings = get_store_settings()
        self.locks = locks or KeyedLockTable()
        self.lock_timeout = store_settings["LOCK_TIMEOUT"] if lock_timeout is None else lock_timeout
        self.max_retries = store_settings["MAX_RETRIES"] if max_retries is None else max_retries
        self.retry_backoff = (
            store_settings["RETRY_BACKOFF"] if retry_backoff is None else retry_backoff
        )
        self._records: Dict[str, Customer] = {}
        self._ids_by_key: Dict[str, str] = {}

    async def _load(self, customer_id: str) -> Optional[Customer]:
        """Read a record from storage."""
        return self._records.get(customer_id)

    async def _store(self, customer: Customer) -> None:
        """Write a record to storage."""
        self._records[customer.id] = customer
        self._ids_by_key[customer.license_key] = customer.id

    async def add(self, customer: Customer) -> Customer:
        """
        Store a new customer record.

        Args:
            customer: Customer record to add

        Returns:
            Stored customer record
        """
        if customer.id in self._records or customer.license_key in self._ids_by_key:
            raise DuplicateCustomerError(
                f"Customer {customer.id} or its license key already exists"
            )
        await self._store(customer)
        return customer

    async def update(self, customer_id: str, mutator: Mutator) -> Tuple[Customer, T]:
        """
        Atomically read, transform and write back one customer record.

        Args:
            customer_id: Customer id
            mutator: Pure transition to apply

        Returns:
            Tuple of (stored record, mutator result)
        """

        async def attempt() -> Tuple[Customer, T]:
            async with self.locks.hold(customer_id, timeout=self.lock_timeout):
                current = await self._load(customer_id)
                if current is None:
                    raise CustomerNotFoundError(f"Customer {customer_id} not found")
                updated, result = mutator(current)
                if updated != current:
                    check_identity(current, updated)
                    await self._store(updated)
                return updated, result

        with store_update_duration_seconds.labels(store="memory").time():
            return await retry_on_contention(
                attempt, self.max_retries, self.retry_backoff, label="memory.update"
            )

    async def find_by_id(self, customer_id: str) -> Optional[Customer]:
        """
        Find a customer by id.

        Args:
            customer_id: Customer id

        Returns:
            Customer record or None if not found
        """
        return await self._load(customer_id)

    async def find_by_license_key(self, license_key: str) -> Optional[Customer]:
        """
        Find a customer by license key.

        Args:
            license_key: License key

        Returns:
            Customer record or None if not found
        """
        customer_id = self._ids_by_key.get(license_key)
        if customer_id is None:
            return None
        return await self._load(customer_id)

    async def list_all(self) -> List[Customer]:
        """
        List every customer record in creation order.

        Returns:
            List of Customer records
        """
        return sorted(self._records.values(), key=lambda customer: customer.created_at)
