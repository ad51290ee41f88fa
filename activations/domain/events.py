"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class LicenseActivated(DomainEvent):
    """Event raised when a device is admitted to a license for the first time."""

    def __init__(
        self,
        customer_id: str,
        device_id: str,
        devices_in_use: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseActivated event.

        Args:
            customer_id: Customer id
            device_id: Newly activated device
            devices_in_use: Activation count after admission
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=customer_id, occurred_at=occurred_at)
        self.customer_id = customer_id
        self.device_id = device_id
        self.devices_in_use = devices_in_use

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            **super().to_dict(),
            "device_id": self.device_id,
            "devices_in_use": self.devices_in_use,
        }
