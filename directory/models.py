from django.db import models


class MessageDelivery(models.Model):
    """One outbound WhatsApp attempt, successful or not."""

    class Audience(models.TextChoices):
        ANO = "ano", "ANO"
        CADET = "cadet", "Cadet"

    class Kind(models.TextChoices):
        CAMP_NOTIFICATION = "camp_notification", "Camp notification"
        SELECTION = "selection", "Selection update"
        INSTITUTE_SELECTION = "institute_selection", "Institute level selection"

    audience = models.CharField(max_length=16, choices=Audience.choices)
    kind = models.CharField(max_length=32, choices=Kind.choices)
    recipient_name = models.CharField(max_length=150, blank=True)
    recipient_email = models.EmailField(blank=True)
    phone_number = models.CharField(max_length=32, blank=True)
    camp = models.ForeignKey(
        "camps.CampNotification",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="deliveries",
    )
    success = models.BooleanField(default=False)
    provider_message_id = models.CharField(max_length=64, blank=True)
    error = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "message deliveries"

    def __str__(self):
        state = "sent" if self.success else "failed"
        return f"{self.get_kind_display()} to {self.recipient_name or self.phone_number} ({state})"
