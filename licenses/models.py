"""
Django model registry for the licenses app.
"""
from licenses.infrastructure.models import Customer  # noqa: F401
