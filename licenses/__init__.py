"""
Licenses module - Customer license records.

This module handles:
- Customer entity, issuance, renewal and bans
- License key generation and the expiry policy
- The activation/verification state machine
- Customer repository (port) and its adapters
"""
