"""
Customer domain entity.

A customer record is the license document: one customer, one license key,
an expiry, a device cap, and the activations bound to the key. It contains
the status rule and the admin transitions (issue, renew, ban).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional

from activations.domain.registry import ActivationRegistry
from core.domain.value_objects import LicenseStatus
from licenses.domain.expiry import add_months, is_expired
from licenses.domain.license_key import generate_customer_id, generate_license_key

DEFAULT_ISSUE_MONTHS = 6
DEFAULT_MAX_DEVICES = 2
DEFAULT_RENEW_MONTHS = 3


def coerce_positive_int(value: Any, default: int) -> int:
    """
    Coerce a loosely typed input to a positive integer.

    Integers, integral floats and numeric strings are accepted. Anything
    else (None, booleans, text, zero, negatives, fractions) yields default.

    Args:
        value: Raw input
        default: Fallback value

    Returns:
        Positive integer
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return default
    if not number.is_integer() or number < 1:
        return default
    return int(number)


@dataclass(frozen=True)
class Customer:
    """
    Customer domain entity.

    status is a persisted cache of effective_status(); decisions are always
    taken on effective_status(now), never on the stored value.
    """

    id: str
    name: str
    email: str
    license_key: str
    status: LicenseStatus
    max_devices: int
    created_at: datetime
    expires_at: datetime
    banned: bool = False
    activations: ActivationRegistry = field(default_factory=ActivationRegistry)

    def __post_init__(self):
        """Validate customer entity."""
        if not self.id:
            raise ValueError("Customer id is required")
        if not self.license_key:
            raise ValueError("License key is required")
        if not self.name or not self.email:
            raise ValueError("Name and email are required")
        if self.max_devices < 1:
            raise ValueError("Max devices must be at least 1")
        if len(self.activations) > self.max_devices:
            raise ValueError(
                f"{len(self.activations)} activations exceed max devices {self.max_devices}"
            )

    @classmethod
    def issue(
        cls,
        name: str,
        email: str,
        now: datetime,
        months: int = DEFAULT_ISSUE_MONTHS,
        max_devices: int = DEFAULT_MAX_DEVICES,
        customer_id: Optional[str] = None,
        license_key: Optional[str] = None,
    ) -> "Customer":
        """
        Create a new active Customer record with no activations.

        Args:
            name: Customer name
            email: Customer email
            now: Issue time
            months: License duration in months
            max_devices: Maximum number of activated devices
            customer_id: Optional id (generated if not provided)
            license_key: Optional key (generated if not provided)

        Returns:
            Customer entity instance
        """
        return cls(
            id=customer_id or generate_customer_id(),
            name=name,
            email=email,
            license_key=license_key or generate_license_key(),
            status=LicenseStatus.ACTIVE,
            max_devices=max_devices,
            created_at=now,
            expires_at=add_months(now, months),
        )

    def is_expired(self, now: datetime) -> bool:
        """Check if the license has passed its expiry."""
        return is_expired(self.expires_at, now)

    def effective_status(self, now: datetime) -> LicenseStatus:
        """
        Compute the status from the ban flag and the expiry.

        A ban overrides expiry.
        """
        if self.banned:
            return LicenseStatus.BANNED
        if self.is_expired(now):
            return LicenseStatus.EXPIRED
        return LicenseStatus.ACTIVE

    def refresh_status(self, now: datetime) -> "Customer":
        """Return a record whose stored status matches effective_status(now)."""
        return self.with_status(self.effective_status(now))

    def with_status(self, status: LicenseStatus) -> "Customer":
        """Return a record with the given stored status."""
        if status == self.status:
            return self
        return replace(self, status=status)

    def with_activations(self, activations: ActivationRegistry) -> "Customer":
        """Return a record with the given activations."""
        return replace(self, activations=activations)

    def renew(self, months: int, now: datetime) -> "Customer":
        """
        Extend the expiry by a number of months.

        An unexpired license is extended from its current expiry so renewal
        never shortens it; an expired one is extended from now. The stored
        status is left alone.

        Args:
            months: Number of months to add
            now: Renewal time

        Returns:
            New Customer instance with updated expiry
        """
        base = now if self.is_expired(now) else self.expires_at
        return replace(self, expires_at=add_months(base, months))

    def set_banned(self, banned: bool, now: datetime) -> "Customer":
        """
        Set or clear the ban flag.

        Unbanning recomputes the status from the expiry, so it never stays
        banned.

        Args:
            banned: New ban flag
            now: Time of the change

        Returns:
            New Customer instance with updated flag and status
        """
        return replace(self, banned=banned).refresh_status(now)
