"""
License domain events.

Domain events represent something that happened to a customer's license.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class CustomerIssued(DomainEvent):
    """Event raised when a customer and license key are issued."""

    def __init__(
        self,
        customer_id: str,
        expires_at: datetime,
        max_devices: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize CustomerIssued event.

        Args:
            customer_id: Customer id
            expires_at: Initial expiry
            max_devices: Device cap
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=customer_id, occurred_at=occurred_at)
        self.customer_id = customer_id
        self.expires_at = expires_at
        self.max_devices = max_devices

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            **super().to_dict(),
            "expires_at": self.expires_at.isoformat(),
            "max_devices": self.max_devices,
        }


class LicenseRenewed(DomainEvent):
    """Event raised when a license expiry is extended."""

    def __init__(
        self,
        customer_id: str,
        previous_expiration: datetime,
        new_expiration: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseRenewed event.

        Args:
            customer_id: Customer id
            previous_expiration: Expiry before renewal
            new_expiration: Expiry after renewal
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=customer_id, occurred_at=occurred_at)
        self.customer_id = customer_id
        self.previous_expiration = previous_expiration
        self.new_expiration = new_expiration

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            **super().to_dict(),
            "previous_expiration": self.previous_expiration.isoformat(),
            "new_expiration": self.new_expiration.isoformat(),
        }


class LicenseBanChanged(DomainEvent):
    """Event raised when a license is banned or unbanned."""

    def __init__(
        self,
        customer_id: str,
        banned: bool,
        status: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseBanChanged event.

        Args:
            customer_id: Customer id
            banned: New ban flag
            status: Status after the change
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=customer_id, occurred_at=occurred_at)
        self.customer_id = customer_id
        self.banned = banned
        self.status = status

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {**super().to_dict(), "banned": self.banned, "status": self.status}
