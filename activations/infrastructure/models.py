"""
Activation Django ORM model.

This is the infrastructure layer model for activations.
Domain entities are in activations.domain.activation.
"""
from django.db import models


class Activation(models.Model):
    """
    Represents a device bound to a customer's license key.
    Consumes one of the customer's devices.
    """

    customer = models.ForeignKey(
        "licenses.Customer",
        on_delete=models.CASCADE,
        related_name="activations",
    )
    device_id = models.CharField(max_length=255, help_text="Caller-supplied device identifier")
    activated_at = models.DateTimeField()
    last_seen = models.DateTimeField()

    class Meta:
        db_table = "activations"
        unique_together = [["customer", "device_id"]]
        # Auto ids grow with insertion, which is first-activation order
        ordering = ["id"]

    def clean(self):
        """Validate activation fields."""
        from django.core.exceptions import ValidationError

        if not self.device_id or len(self.device_id.strip()) == 0:
            raise ValidationError("Device identifier cannot be empty")

    def __str__(self):
        return f"{self.customer_id} @ {self.device_id}"
