from django.contrib import admin

from .models import MessageDelivery


@admin.register(MessageDelivery)
class MessageDeliveryAdmin(admin.ModelAdmin):
    list_display = (
        "created_at",
        "kind",
        "audience",
        "recipient_name",
        "phone_number",
        "camp",
        "success",
    )
    list_filter = ("kind", "audience", "success")
    search_fields = ("recipient_name", "recipient_email", "phone_number", "provider_message_id")
    readonly_fields = [f.name for f in MessageDelivery._meta.fields]
