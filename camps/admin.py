from django.contrib import admin

from .models import (
    CadetSubmission,
    CampNotification,
    CampVacancy,
    FinalizedCadet,
    FinalizedSelection,
    InstituteSelectedCadet,
    InstituteSelection,
    SubmissionDocument,
    SubmittedCadet,
)


class CampVacancyInline(admin.TabularInline):
    model = CampVacancy
    extra = 0
    autocomplete_fields = ("college",)


@admin.register(CampNotification)
class CampNotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "unit", "reporting_date", "venue", "send_to", "status", "created_at")
    list_filter = ("status", "send_to", "unit")
    search_fields = ("title", "venue", "description")
    readonly_fields = ("created_at", "updated_at")
    inlines = [CampVacancyInline]


class SubmittedCadetInline(admin.TabularInline):
    model = SubmittedCadet
    extra = 0
    readonly_fields = ("decided_by", "decided_at")


class SubmissionDocumentInline(admin.TabularInline):
    model = SubmissionDocument
    extra = 0
    readonly_fields = ("uploaded_by", "uploaded_at")


@admin.register(CadetSubmission)
class CadetSubmissionAdmin(admin.ModelAdmin):
    list_display = ("camp", "college", "ano", "status", "submitted_at", "finalized_at")
    list_filter = ("status", "camp__unit")
    search_fields = ("camp__title", "college__name", "cadets__name", "cadets__email")
    readonly_fields = ("submitted_at", "updated_at", "reviewed_at", "finalized_at")
    inlines = [SubmittedCadetInline, SubmissionDocumentInline]


class FinalizedCadetInline(admin.TabularInline):
    model = FinalizedCadet
    extra = 0
    exclude = ("cadet",)


@admin.register(FinalizedSelection)
class FinalizedSelectionAdmin(admin.ModelAdmin):
    list_display = ("camp_title", "college_name", "reviewer_name", "finalized_at")
    search_fields = ("camp_title", "college_name", "cadets__name")
    inlines = [FinalizedCadetInline]


class InstituteSelectedCadetInline(admin.TabularInline):
    model = InstituteSelectedCadet
    extra = 0
    exclude = ("finalized_cadet", "submission", "camp")


@admin.register(InstituteSelection)
class InstituteSelectionAdmin(admin.ModelAdmin):
    list_display = ("selection_date", "unit", "created_by", "total_selected")
    list_filter = ("unit",)
    readonly_fields = ("camp_breakdown", "college_breakdown")
    inlines = [InstituteSelectedCadetInline]
