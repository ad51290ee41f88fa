"""
Store configuration.

Reads the LICENSE_STORE settings dict and fills in defaults.
"""

from typing import Any, Dict

from django.conf import settings

DEFAULT_STORE_SETTINGS: Dict[str, Any] = {
    "LOCK_TIMEOUT": 5.0,
    "MAX_RETRIES": 3,
    "RETRY_BACKOFF": 0.05,
    "KEY_PREFIX": "LIC",
    "KEY_GENERATION_ATTEMPTS": 5,
}


def get_store_settings() -> Dict[str, Any]:
    """
    Get store settings merged over the defaults.

    Returns:
        Dictionary with every key of DEFAULT_STORE_SETTINGS
    """
    configured = getattr(settings, "LICENSE_STORE", None) or {}
    return {**DEFAULT_STORE_SETTINGS, **configured}
