"""
Activation registry.

Ordered, device-unique set of activations belonging to one license.
The registry is immutable; every change returns a new registry, and only
the license state machine applies changes to a customer record.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator, Optional, Tuple

from activations.domain.activation import Activation


@dataclass(frozen=True)
class ActivationRegistry:
    """Activations of one license in first-activation order."""

    activations: Tuple[Activation, ...] = ()

    def __post_init__(self):
        """Validate that device ids are unique."""
        device_ids = [activation.device_id for activation in self.activations]
        if len(device_ids) != len(set(device_ids)):
            raise ValueError("Duplicate device id in activation registry")

    @classmethod
    def of(cls, activations: Iterable[Activation]) -> "ActivationRegistry":
        """Build a registry from any iterable of activations."""
        return cls(tuple(activations))

    def __iter__(self) -> Iterator[Activation]:
        return iter(self.activations)

    def __len__(self) -> int:
        return len(self.activations)

    def __contains__(self, device_id: object) -> bool:
        return self.find(device_id) is not None

    def find(self, device_id) -> Optional[Activation]:
        """
        Find the activation of a device.

        Args:
            device_id: Device identifier

        Returns:
            Activation or None if the device is not activated
        """
        for activation in self.activations:
            if activation.device_id == device_id:
                return activation
        return None

    def has_capacity(self, max_devices: int) -> bool:
        """Return True if one more device fits under max_devices."""
        return len(self.activations) < max_devices

    def add(self, device_id: str, now: datetime) -> "ActivationRegistry":
        """
        Append a new activation for a device.

        Args:
            device_id: Device identifier not yet in the registry
            now: Activation time

        Returns:
            New registry with the activation appended

        Raises:
            ValueError: If the device is already activated
        """
        if device_id in self:
            raise ValueError(f"Device {device_id} is already activated")
        return ActivationRegistry(self.activations + (Activation.create(device_id, now),))

    def touch(self, device_id: str, now: datetime) -> "ActivationRegistry":
        """
        Refresh last_seen of an activated device.

        Args:
            device_id: Device identifier present in the registry
            now: Time the device was seen

        Returns:
            New registry with the device's last_seen updated

        Raises:
            KeyError: If the device is not activated
        """
        if device_id not in self:
            raise KeyError(device_id)
        return ActivationRegistry(
            tuple(
                activation.seen(now) if activation.device_id == device_id else activation
                for activation in self.activations
            )
        )
