"""
IssueCustomerCommand.

Command to create a customer and issue their license key.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class IssueCustomerCommand:
    """
    Command to issue a license to a new customer.

    months and max_devices are taken as given by the caller and coerced
    by the handler (6 months and 2 devices when missing or invalid).
    """

    name: str
    email: str
    months: Optional[Any] = None
    max_devices: Optional[Any] = None
