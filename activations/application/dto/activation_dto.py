"""
Activation DTOs for responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.value_objects import ActivationOutcome
from licenses.domain.expiry import format_timestamp


@dataclass
class ActivationResultDTO:
    """
    DTO for an activation response.

    expires_at, device_id and customer_name are set on success;
    expires_at alone on an expired license; max_devices alone when the
    device limit is reached.
    """

    outcome: ActivationOutcome
    expires_at: Optional[datetime] = None
    device_id: Optional[str] = None
    customer_name: Optional[str] = None
    max_devices: Optional[int] = None

    @property
    def status(self) -> str:
        """Outcome as the status string returned to devices."""
        return self.outcome.value

    @property
    def is_active(self) -> bool:
        return self.outcome.is_success

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the response payload, omitting unset fields."""
        payload: Dict[str, Any] = {"status": self.status}
        if self.expires_at is not None:
            payload["expiresAt"] = format_timestamp(self.expires_at)
        if self.device_id is not None:
            payload["deviceId"] = self.device_id
        if self.customer_name is not None:
            payload["customerName"] = self.customer_name
        if self.max_devices is not None:
            payload["maxDevices"] = self.max_devices
        return payload


@dataclass
class VerificationResultDTO:
    """DTO for a verification response."""

    outcome: ActivationOutcome
    expires_at: Optional[datetime] = None

    @property
    def status(self) -> str:
        """Outcome as the status string returned to devices."""
        return self.outcome.value

    @property
    def is_active(self) -> bool:
        return self.outcome.is_success

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the response payload, omitting unset fields."""
        payload: Dict[str, Any] = {"status": self.status}
        if self.expires_at is not None:
            payload["expiresAt"] = format_timestamp(self.expires_at)
        return payload
