"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and value objects
- Per-record locking and contention retry
- Event bus, metrics and management commands
"""
