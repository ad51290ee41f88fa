from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.CharField(editable=False, max_length=64, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("email", models.CharField(db_index=True, max_length=254)),
                ("license_key", models.CharField(max_length=100, unique=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("expired", "Expired"), ("banned", "Banned")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("banned", models.BooleanField(default=False)),
                (
                    "max_devices",
                    models.PositiveIntegerField(default=2, help_text="Maximum number of activated devices"),
                ),
                ("created_at", models.DateTimeField()),
                ("expires_at", models.DateTimeField()),
            ],
            options={
                "db_table": "customers",
                "ordering": ["created_at"],
                "indexes": [models.Index(fields=["status", "expires_at"], name="customers_status_expires_idx")],
            },
        ),
    ]
