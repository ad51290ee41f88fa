"""
RenewCustomerCommand.

Command to extend a customer's license.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class RenewCustomerCommand:
    """Command to renew a license by a number of months (3 when missing or invalid)."""

    customer_id: str
    months: Optional[Any] = None
