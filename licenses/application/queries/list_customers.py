"""
ListCustomersQuery.

Query to list every customer record.
"""
from dataclasses import dataclass


@dataclass
class ListCustomersQuery:
    """Query for all customer records in creation order."""
