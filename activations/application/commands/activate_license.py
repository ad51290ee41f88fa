"""
ActivateLicenseCommand.

Command to activate a license key on a device.
"""
from dataclasses import dataclass


@dataclass
class ActivateLicenseCommand:
    """Command to admit a device to a license."""

    license_key: str
    device_id: str
