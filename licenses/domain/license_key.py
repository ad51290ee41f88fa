"""
License key and customer id generation.

Keys are opaque random tokens drawn from a cryptographically secure source.
The generator has no view of existing keys; the store rejects collisions.
"""

import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits
ID_ALPHABET = string.ascii_lowercase + string.digits
DEFAULT_KEY_PREFIX = "LIC"


def generate_license_key(prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Generate a license key in format: PREFIX-XXXX-XXXX-XXXX-XXXX.

    Args:
        prefix: Constant tag placed in front of the blocks

    Returns:
        Generated license key string
    """
    parts = ["".join(secrets.choice(KEY_ALPHABET) for _ in range(4)) for _ in range(4)]
    return f"{prefix}-{'-'.join(parts)}"


def generate_customer_id(prefix: str = "cust") -> str:
    """
    Generate an opaque customer id such as cust_k3v9x0a1b2c4.

    Args:
        prefix: Tag placed in front of the random part

    Returns:
        Generated id string
    """
    return f"{prefix}_{''.join(secrets.choice(ID_ALPHABET) for _ in range(12))}"
