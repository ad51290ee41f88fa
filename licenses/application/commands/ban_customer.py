"""
BanCustomerCommand.

Command to ban or unban a customer's license.
"""
from dataclasses import dataclass


@dataclass
class BanCustomerCommand:
    """Command to set the ban flag of a license."""

    customer_id: str
    banned: bool = True
