import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("licenses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Activation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("device_id", models.CharField(help_text="Caller-supplied device identifier", max_length=255)),
                ("activated_at", models.DateTimeField()),
                ("last_seen", models.DateTimeField()),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activations",
                        to="licenses.customer",
                    ),
                ),
            ],
            options={
                "db_table": "activations",
                "ordering": ["id"],
                "unique_together": {("customer", "device_id")},
            },
        ),
    ]
