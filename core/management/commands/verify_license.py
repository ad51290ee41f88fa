"""
Django management command to verify a license on an activated device.
"""

from activations.application.commands.verify_license import VerifyLicenseCommand
from activations.application.handlers.verify_license_handler import VerifyLicenseHandler
from core.management.service_command import ServiceCommand


class Command(ServiceCommand):
    """Command to verify a device."""

    help = "Verify a license key on an activated device"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_key", type=str, help="License key")
        parser.add_argument("device_id", type=str, help="Device identifier")

    def handle(self, *args, **options):
        """Execute the command."""
        handler = VerifyLicenseHandler(self.get_repository())
        result = self.run(
            handler.handle(
                VerifyLicenseCommand(
                    license_key=options["license_key"], device_id=options["device_id"]
                )
            )
        )
        self.emit(result.to_dict())
