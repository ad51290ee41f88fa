"""
VerifyLicenseCommand.

Command to check a license from an already activated device.
"""
from dataclasses import dataclass


@dataclass
class VerifyLicenseCommand:
    """Command to verify a device's license."""

    license_key: str
    device_id: str
