"""
App configuration for License Activation Service.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LicenseActivationServiceConfig(AppConfig):
    """App configuration for LicenseActivationService."""

    name = "LicenseActivationService"
    verbose_name = "License Activation Service"

    def ready(self):
        """Register event handlers once the apps are loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
