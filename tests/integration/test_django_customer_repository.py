"""
Integration tests for the Django customer repository.
"""

import asyncio
from datetime import timedelta

import pytest

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.infrastructure.models import Activation as ActivationModel
from core.domain.exceptions import CustomerNotFoundError, DuplicateCustomerError
from core.domain.value_objects import ActivationOutcome, LicenseStatus
from licenses.domain.customer import Customer
from licenses.domain.expiry import add_months
from licenses.domain.services import LicenseStateMachine
from licenses.infrastructure.models import Customer as CustomerModel


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestDjangoCustomerRepository:
    """Integration tests for DjangoCustomerRepository."""

    @pytest.mark.asyncio
    async def test_add_and_find(self, django_customer_repository, sample_customer):
        """Test adding and finding a customer."""
        await django_customer_repository.add(sample_customer)

        by_id = await django_customer_repository.find_by_id(sample_customer.id)
        by_key = await django_customer_repository.find_by_license_key(sample_customer.license_key)

        assert by_id == sample_customer
        assert by_key == sample_customer
        assert await django_customer_repository.find_by_id("cust_missing") is None
        assert await django_customer_repository.find_by_license_key("LIC-NOPE") is None

    @pytest.mark.asyncio
    async def test_add_duplicate(self, django_customer_repository, sample_customer):
        """Test a colliding id or key is rejected."""
        await django_customer_repository.add(sample_customer)
        same_key = Customer.issue(
            name="Bob",
            email="bob@example.com",
            now=sample_customer.created_at,
            license_key=sample_customer.license_key,
        )

        with pytest.raises(DuplicateCustomerError):
            await django_customer_repository.add(sample_customer)
        with pytest.raises(DuplicateCustomerError):
            await django_customer_repository.add(same_key)

        assert await CustomerModel.objects.acount() == 1

    @pytest.mark.asyncio
    async def test_update_writes_activations(self, django_customer_repository, sample_customer):
        """Test activations are inserted and touched in place."""
        await django_customer_repository.add(sample_customer)
        first = sample_customer.created_at + timedelta(minutes=1)
        later = first + timedelta(hours=1)

        await django_customer_repository.update(
            sample_customer.id,
            lambda current: LicenseStateMachine.activate(current, "laptop", first),
        )
        await django_customer_repository.update(
            sample_customer.id,
            lambda current: LicenseStateMachine.activate(current, "phone", first),
        )
        updated, decision = await django_customer_repository.update(
            sample_customer.id,
            lambda current: LicenseStateMachine.verify(current, "laptop", later),
        )

        assert decision.outcome is ActivationOutcome.ACTIVE
        stored = await django_customer_repository.find_by_id(sample_customer.id)
        assert stored == updated
        assert [activation.device_id for activation in stored.activations] == ["laptop", "phone"]
        assert stored.activations.find("laptop").activated_at == first
        assert stored.activations.find("laptop").last_seen == later
        assert await ActivationModel.objects.acount() == 2

    @pytest.mark.asyncio
    async def test_update_status_fields(self, django_customer_repository, sample_customer):
        """Test ban, renewal and status are persisted."""
        await django_customer_repository.add(sample_customer)
        now = sample_customer.created_at

        await django_customer_repository.update(
            sample_customer.id,
            lambda current: (current.renew(3, now).set_banned(True, now), None),
        )

        stored = await django_customer_repository.find_by_id(sample_customer.id)
        assert stored.banned is True
        assert stored.status == LicenseStatus.BANNED
        assert stored.expires_at == add_months(sample_customer.expires_at, 3)

    @pytest.mark.asyncio
    async def test_update_unknown(self, django_customer_repository):
        """Test updating an unknown customer."""
        with pytest.raises(CustomerNotFoundError):
            await django_customer_repository.update("cust_missing", lambda c: (c, None))

    @pytest.mark.asyncio
    async def test_failed_mutator_writes_nothing(
        self, django_customer_repository, sample_customer
    ):
        """Test an exception inside the mutator leaves the record as it was."""
        await django_customer_repository.add(sample_customer)

        def explode(current):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await django_customer_repository.update(sample_customer.id, explode)

        assert await django_customer_repository.find_by_id(sample_customer.id) == sample_customer

    @pytest.mark.asyncio
    async def test_identity_fields_are_immutable(
        self, django_customer_repository, sample_customer
    ):
        """Test a mutator cannot change the license key."""
        from dataclasses import replace

        await django_customer_repository.add(sample_customer)

        with pytest.raises(ValueError):
            await django_customer_repository.update(
                sample_customer.id,
                lambda current: (replace(current, license_key="LIC-OTHER"), None),
            )

        stored = await django_customer_repository.find_by_license_key(sample_customer.license_key)
        assert stored == sample_customer

    @pytest.mark.asyncio
    async def test_list_all_in_creation_order(self, django_customer_repository, sample_customer):
        """Test listing orders by creation time."""
        earlier = Customer.issue(
            name="Early",
            email="early@example.com",
            now=sample_customer.created_at - timedelta(days=1),
        )
        await django_customer_repository.add(sample_customer)
        await django_customer_repository.add(earlier)

        customers = await django_customer_repository.list_all()

        assert [customer.id for customer in customers] == [earlier.id, sample_customer.id]

    @pytest.mark.asyncio
    async def test_concurrent_activations_respect_cap(
        self, django_customer_repository, sample_customer, clock
    ):
        """Test concurrent activations against the database admit max_devices."""
        await django_customer_repository.add(sample_customer)
        handler = ActivateLicenseHandler(django_customer_repository, clock=clock)

        results = await asyncio.gather(
            *(
                handler.handle(
                    ActivateLicenseCommand(
                        license_key=sample_customer.license_key, device_id=f"device-{i}"
                    )
                )
                for i in range(6)
            )
        )

        outcomes = [result.outcome for result in results]
        assert outcomes.count(ActivationOutcome.ACTIVE) == 2
        assert outcomes.count(ActivationOutcome.LIMIT_EXCEEDED) == 4
        assert await ActivationModel.objects.acount() == 2
