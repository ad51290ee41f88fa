"""
Customer Django ORM model.

This is the infrastructure layer model for customer license records.
Domain entities are in licenses.domain.customer.
"""
from django.db import models


class Customer(models.Model):
    """
    A customer and the license key issued to them.

    Timestamps are written from the domain entity, never auto-filled, so a
    record round-trips exactly.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("expired", "Expired"),
        ("banned", "Banned"),
    ]

    id = models.CharField(primary_key=True, max_length=64, editable=False)
    name = models.CharField(max_length=255)
    email = models.CharField(max_length=254, db_index=True)
    license_key = models.CharField(max_length=100, unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    banned = models.BooleanField(default=False)
    max_devices = models.PositiveIntegerField(default=2, help_text="Maximum number of activated devices")
    created_at = models.DateTimeField()
    expires_at = models.DateTimeField()

    class Meta:
        db_table = "customers"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["status", "expires_at"], name="customers_status_expires_idx"),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}>"
