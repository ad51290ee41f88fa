"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from dataclasses import dataclass
from enum import Enum


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "active"
    EXPIRED = "expired"
    BANNED = "banned"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class ActivationOutcome(Enum):
    """Outcome of an activation or verification request."""

    ACTIVE = "active"
    EXPIRED = "expired"
    BANNED = "banned"
    LIMIT_EXCEEDED = "limit_exceeded"
    NOT_ACTIVATED = "not_activated"

    @classmethod
    def from_status(cls, status: LicenseStatus) -> "ActivationOutcome":
        """Map a license status onto the matching outcome."""
        return cls(status.value)

    @property
    def is_success(self) -> bool:
        """Only an active outcome grants use of the license."""
        return self is ActivationOutcome.ACTIVE

    def __str__(self) -> str:
        """Return outcome as string."""
        return self.value


@dataclass(frozen=True)
class DeviceId:
    """Device identifier value object."""

    value: str

    MAX_LENGTH = 255

    def __post_init__(self):
        """Validate device identifier."""
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Device identifier cannot be empty")
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError("Device identifier too long")

    def __str__(self) -> str:
        """Return identifier as string."""
        return self.value
