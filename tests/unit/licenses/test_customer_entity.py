"""
Unit tests for Customer domain entity.
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from activations.domain.registry import ActivationRegistry
from core.domain.value_objects import LicenseStatus
from licenses.domain.customer import Customer, coerce_positive_int

NOW = datetime(2024, 1, 15, 12, tzinfo=timezone.utc)


class TestCoercePositiveInt:
    """Tests for coerce_positive_int."""

    @pytest.mark.parametrize(
        "value, expected",
        [(3, 3), ("4", 4), (" 5 ", 5), (2.0, 2), ("7.0", 7)],
    )
    def test_accepted(self, value, expected):
        """Test positive integral inputs are kept."""
        assert coerce_positive_int(value, 6) == expected

    @pytest.mark.parametrize(
        "value", [None, 0, -1, 1.5, "abc", "", True, False, [], "0"]
    )
    def test_default(self, value):
        """Test anything else falls back to the default."""
        assert coerce_positive_int(value, 6) == 6


class TestCustomerEntity:
    """Tests for Customer domain entity."""

    def test_issue(self):
        """Test issuing a customer record."""
        customer = Customer.issue(name="Ada", email="ada@example.com", now=NOW)

        assert customer.id.startswith("cust_")
        assert customer.license_key.startswith("LIC-")
        assert customer.status == LicenseStatus.ACTIVE
        assert customer.banned is False
        assert customer.max_devices == 2
        assert customer.created_at == NOW
        assert customer.expires_at == datetime(2024, 7, 15, 12, tzinfo=timezone.utc)
        assert len(customer.activations) == 0

    def test_issue_with_explicit_values(self):
        """Test issuing with months, devices, id and key."""
        customer = Customer.issue(
            name="Ada",
            email="ada@example.com",
            now=NOW,
            months=12,
            max_devices=5,
            customer_id="cust_fixed",
            license_key="LIC-1111-2222-3333-4444",
        )

        assert customer.id == "cust_fixed"
        assert customer.license_key == "LIC-1111-2222-3333-4444"
        assert customer.max_devices == 5
        assert customer.expires_at == datetime(2025, 1, 15, 12, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "changes",
        [{"id": ""}, {"license_key": ""}, {"name": ""}, {"email": ""}, {"max_devices": 0}],
    )
    def test_invalid(self, sample_customer, changes):
        """Test invalid records are rejected."""
        with pytest.raises(ValueError):
            replace(sample_customer, **changes)

    def test_activations_cannot_exceed_max_devices(self, sample_customer):
        """Test a record never holds more activations than max devices."""
        activations = ActivationRegistry().add("a", NOW).add("b", NOW).add("c", NOW)

        with pytest.raises(ValueError):
            sample_customer.with_activations(activations)

    def test_effective_status(self, sample_customer):
        """Test the status rule: ban first, then expiry."""
        before = sample_customer.expires_at - timedelta(seconds=1)
        after = sample_customer.expires_at + timedelta(days=1)

        assert sample_customer.effective_status(before) == LicenseStatus.ACTIVE
        assert sample_customer.effective_status(sample_customer.expires_at) == (
            LicenseStatus.EXPIRED
        )
        assert sample_customer.effective_status(after) == LicenseStatus.EXPIRED

        banned = replace(sample_customer, banned=True)
        assert banned.effective_status(before) == LicenseStatus.BANNED
        assert banned.effective_status(after) == LicenseStatus.BANNED

    def test_renew_unexpired_extends_from_expiry(self, sample_customer):
        """Test renewal never shortens an unexpired license."""
        renewed = sample_customer.renew(3, NOW)

        assert renewed.expires_at == datetime(2024, 10, 15, 12, tzinfo=timezone.utc)
        assert renewed.status == LicenseStatus.ACTIVE

    def test_renew_expired_extends_from_now(self, sample_customer):
        """Test an expired license is extended from the renewal time."""
        later = datetime(2024, 9, 1, 8, tzinfo=timezone.utc)
        expired = sample_customer.with_status(LicenseStatus.EXPIRED)

        renewed = expired.renew(3, later)

        assert renewed.expires_at == datetime(2024, 12, 1, 8, tzinfo=timezone.utc)
        # renewal leaves the stored status for the next transition to fix
        assert renewed.status == LicenseStatus.EXPIRED

    def test_renew_keeps_ban(self, sample_customer):
        """Test renewing a banned license keeps it banned."""
        banned = sample_customer.set_banned(True, NOW)

        renewed = banned.renew(3, NOW)

        assert renewed.banned is True
        assert renewed.status == LicenseStatus.BANNED

    def test_ban_and_unban(self, sample_customer):
        """Test ban sets the status and unban recomputes it."""
        banned = sample_customer.set_banned(True, NOW)
        assert banned.banned is True
        assert banned.status == LicenseStatus.BANNED

        unbanned = banned.set_banned(False, NOW)
        assert unbanned.banned is False
        assert unbanned.status == LicenseStatus.ACTIVE

    def test_unban_expired_license(self, sample_customer):
        """Test unbanning after expiry yields expired."""
        later = sample_customer.expires_at + timedelta(days=1)
        banned = sample_customer.set_banned(True, NOW)

        unbanned = banned.set_banned(False, later)

        assert unbanned.status == LicenseStatus.EXPIRED

    def test_with_status_same_value_returns_self(self, sample_customer):
        """Test an unchanged status returns the same record."""
        assert sample_customer.with_status(LicenseStatus.ACTIVE) is sample_customer

    def test_refresh_status(self, sample_customer):
        """Test refresh_status applies the status rule."""
        later = sample_customer.expires_at + timedelta(seconds=1)

        assert sample_customer.refresh_status(later).status == LicenseStatus.EXPIRED
        assert sample_customer.refresh_status(NOW) is sample_customer
