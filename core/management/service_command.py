"""
Base class for the license management commands.

Runs an async handler to completion, prints its result as JSON and turns
domain errors into CommandError so the process exits non-zero.
"""

import asyncio
import json
import logging

from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from licenses.infrastructure.repositories.django_customer_repository import (
    DjangoCustomerRepository,
)

logger = logging.getLogger(__name__)


class ServiceCommand(BaseCommand):
    """Management command backed by the Django customer store."""

    def get_repository(self) -> DjangoCustomerRepository:
        """Return the repository the command operates on."""
        return DjangoCustomerRepository()

    def run(self, coroutine):
        """
        Run a handler coroutine.

        Raises:
            CommandError: If the handler raised a domain exception
        """
        try:
            return asyncio.run(coroutine)
        except DomainException as exc:
            logger.warning("Command failed: %s (%s)", exc.message, exc.code)
            raise CommandError(f"{exc.code}: {exc.message}") from exc

    def emit(self, payload) -> None:
        """Write a JSON payload to stdout."""
        self.stdout.write(json.dumps(payload, indent=2))
