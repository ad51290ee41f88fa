"""
Django implementation of CustomerRepository port.

This adapter converts between domain entities and Django ORM models and
makes each update atomic per customer:

1. an in-process lock per customer id serializes coroutines of this process
2. the read-decide-write runs in one database transaction
3. on backends that support it the row is locked with SELECT ... FOR UPDATE
   NOWAIT, so writers in other processes are excluded as well

A held row lock or a busy database surfaces as StoreContentionError and the
update is retried with backoff before giving up.
"""

import logging
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, OperationalError, connection, transaction

from activations.domain.activation import Activation
from activations.domain.registry import ActivationRegistry
from activations.infrastructure.models import Activation as ActivationModel
from core.config import get_store_settings
from core.domain.exceptions import (
    CustomerNotFoundError,
    DuplicateCustomerError,
    StoreContentionError,
)
from core.domain.value_objects import LicenseStatus
from core.infrastructure.database import retry_on_contention
from core.infrastructure.locks import KeyedLockTable, record_locks
from core.metrics import store_update_duration_seconds
from licenses.domain.customer import Customer
from licenses.infrastructure.models import Customer as CustomerModel
from licenses.ports.customer_repository import CustomerRepository, Mutator, T, check_identity

logger = logging.getLogger(__name__)


class DjangoCustomerRepository(CustomerRepository):
    """
    Django ORM implementation of CustomerRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def __init__(
        self,
        locks: Optional[KeyedLockTable] = None,
        lock_timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ):
        """Initialize repository with the process-wide lock table."""
        store_settings = get_store_settings()
        self.locks = locks or record_locks
        self.lock_timeout = store_settings["LOCK_TIMEOUT"] if lock_timeout is None else lock_timeout
        self.max_retries = store_settings["MAX_RETRIES"] if max_retries is None else max_retries
        self.retry_backoff = (
            store_settings["RETRY_BACKOFF"] if retry_backoff is None else retry_backoff
        )

    def _to_domain(self, model: CustomerModel) -> Customer:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Customer model

        Returns:
            Customer domain entity
        """
        activations = ActivationRegistry.of(
            Activation(
                device_id=activation.device_id,
                activated_at=activation.activated_at,
                last_seen=activation.last_seen,
            )
            for activation in model.activations.all()
        )
        return Customer(
            id=model.id,
            name=model.name,
            email=model.email,
            license_key=model.license_key,
            status=LicenseStatus(model.status),
            banned=model.banned,
            max_devices=model.max_devices,
            created_at=model.created_at,
            expires_at=model.expires_at,
            activations=activations,
        )

    def _locked_queryset(self):
        """Customer queryset that row-locks what it reads when supported."""
        queryset = CustomerModel.objects.prefetch_related("activations")  # pylint: disable=no-member
        if connection.features.has_select_for_update_nowait:
            queryset = queryset.select_for_update(nowait=True)
        return queryset

    def _write_activations(self, model: CustomerModel, customer: Customer) -> None:
        """
        Bring stored activations in line with the entity.

        Activations are only ever appended or touched, so existing rows
        are updated in place and new devices are inserted in order.
        """
        existing = {activation.device_id: activation for activation in model.activations.all()}
        for activation in customer.activations:
            row = existing.get(activation.device_id)
            if row is None:
                row = ActivationModel(
                    customer=model,
                    device_id=activation.device_id,
                    activated_at=activation.activated_at,
                    last_seen=activation.last_seen,
                )
                row.full_clean(exclude=["customer"])
                row.save()
            elif row.last_seen != activation.last_seen:
                row.last_seen = activation.last_seen
                row.save(update_fields=["last_seen"])

    def _add_sync(self, customer: Customer) -> Customer:
        try:
            with transaction.atomic():
                model = CustomerModel(
                    id=customer.id,
                    name=customer.name,
                    email=customer.email,
                    license_key=customer.license_key,
                    status=customer.status.value,
                    banned=customer.banned,
                    max_devices=customer.max_devices,
                    created_at=customer.created_at,
                    expires_at=customer.expires_at,
                )
                # force_insert so an existing id is a collision, not an overwrite
                model.save(force_insert=True)
                self._write_activations(model, customer)
        except IntegrityError as exc:
            raise DuplicateCustomerError(
                f"Customer {customer.id} or its license key already exists"
            ) from exc
        return customer

    def _update_sync(self, customer_id: str, mutator: Mutator) -> Tuple[Customer, T]:
        try:
            with transaction.atomic():
                model = self._locked_queryset().filter(id=customer_id).first()
                if model is None:
                    raise CustomerNotFoundError(f"Customer {customer_id} not found")

                current = self._to_domain(model)
                updated, result = mutator(current)
                if updated == current:
                    return current, result

                check_identity(current, updated)
                model.status = updated.status.value
                model.banned = updated.banned
                model.expires_at = updated.expires_at
                model.name = updated.name
                model.email = updated.email
                model.save(update_fields=["status", "banned", "expires_at", "name", "email"])
                self._write_activations(model, updated)
                return updated, result
        except OperationalError as exc:
            # Row locked by another transaction, or the database is busy
            raise StoreContentionError(f"Customer {customer_id} is locked: {exc}") from exc

    async def add(self, customer: Customer) -> Customer:
        """
        Store a new customer record.

        Args:
            customer: Customer record to add

        Returns:
            Stored customer record
        """
        return await sync_to_async(self._add_sync)(customer)

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
                return await sync_to_async(self._update_sync)(customer_id, mutator)

        with store_update_duration_seconds.labels(store="django").time():
            return await retry_on_contention(
                attempt, self.max_retries, self.retry_backoff, label="django.update"
            )

    @sync_to_async
    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        """
        Find a customer by id.

        Args:
            customer_id: Customer id

        Returns:
            Customer record or None if not found
        """
        try:
            model = CustomerModel.objects.prefetch_related("activations").get(id=customer_id)
            return self._to_domain(model)
        except CustomerModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_license_key(self, license_key: str) -> Optional[Customer]:
        """
        Find a customer by license key.

        Args:
            license_key: License key

        Returns:
            Customer record or None if not found
        """
        try:
            model = CustomerModel.objects.prefetch_related("activations").get(
                license_key=license_key
            )
            return self._to_domain(model)
        except CustomerModel.DoesNotExist:
            return None

    @sync_to_async
    def list_all(self) -> List[Customer]:
        """
        List every customer record in creation order.

        Returns:
            List of Customer records
        """
        models = CustomerModel.objects.prefetch_related("activations").order_by("created_at", "id")
        return [self._to_domain(model) for model in models]
