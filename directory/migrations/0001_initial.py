# Generated manually for the outbound message log.

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("camps", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="MessageDelivery",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("audience", models.CharField(choices=[("ano", "ANO"), ("cadet", "Cadet")], max_length=16)),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("camp_notification", "Camp notification"),
                            ("selection", "Selection update"),
                            ("institute_selection", "Institute level selection"),
                        ],
                        max_length=32,
                    ),
                ),
                ("recipient_name", models.CharField(blank=True, max_length=150)),
                ("recipient_email", models.EmailField(blank=True, max_length=254)),
                ("phone_number", models.CharField(blank=True, max_length=32)),
                ("success", models.BooleanField(default=False)),
                ("provider_message_id", models.CharField(blank=True, max_length=64)),
                ("error", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "camp",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="deliveries",
                        to="camps.campnotification",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "message deliveries",
                "ordering": ["-created_at"],
            },
        ),
    ]
