"""
Django management command to activate a license on a device.
"""

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from core.management.service_command import ServiceCommand


class Command(ServiceCommand):
    """Command to activate a device."""

    help = "Activate a license key on a device"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_key", type=str, help="License key")
        parser.add_argument("device_id", type=str, help="Device identifier")

    def handle(self, *args, **options):
        """Execute the command."""
        handler = ActivateLicenseHandler(self.get_repository())
        result = self.run(
            handler.handle(
                ActivateLicenseCommand(
                    license_key=options["license_key"], device_id=options["device_id"]
                )
            )
        )
        self.emit(result.to_dict())
