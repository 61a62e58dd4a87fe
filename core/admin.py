from django.contrib import admin

from .models import ActivityLog, AnoContact, College, Profile, Unit


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "created_at")
    list_filter = ("role",)
    search_fields = ("user__username", "user__email", "user__first_name", "user__last_name")


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ("name", "co", "clerk", "updated_at")
    search_fields = ("name", "colleges__name")
    autocomplete_fields = ("co", "clerk")


@admin.register(College)
class CollegeAdmin(admin.ModelAdmin):
    list_display = ("name", "unit", "updated_at")
    list_filter = ("unit",)
    search_fields = ("name", "unit__name")
    filter_horizontal = ("anos",)


@admin.register(AnoContact)
class AnoContactAdmin(admin.ModelAdmin):
    list_display = ("name", "rank", "email", "whatsapp_number")
    list_filter = ("rank",)
    search_fields = ("name", "email", "whatsapp_number")


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "user", "action", "description", "ip_address")
    list_filter = ("action",)
    search_fields = ("user__username", "action", "description")
    readonly_fields = ("timestamp",)
