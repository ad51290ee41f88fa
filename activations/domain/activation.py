"""
Activation domain entity.

An activation binds one device to a license. It is owned by its customer
record and has no lifecycle of its own.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from core.domain.value_objects import DeviceId


@dataclass(frozen=True)
class Activation:
    """
    Activation value object.

    activated_at is fixed at first activation; last_seen moves forward on
    every successful activate or verify call from the device.
    """

    device_id: str
    activated_at: datetime
    last_seen: datetime

    def __post_init__(self):
        """Validate activation entity."""
        DeviceId(self.device_id)

    @classmethod
    def create(cls, device_id: str, now: datetime) -> "Activation":
        """
        Create a first-time activation for a device.

        Args:
            device_id: Caller-supplied device identifier
            now: Activation time

        Returns:
            Activation entity instance
        """
        return cls(device_id=device_id, activated_at=now, last_seen=now)

    def seen(self, now: datetime) -> "Activation":
        """
        Create a new Activation instance with updated last_seen.

        Returns:
            New Activation instance with updated timestamp
        """
        return replace(self, last_seen=now)
