from django.contrib.auth.models import User
from django.db import models
from django.db.models import Q, Sum
from django.utils import timezone

from core.models import College, Unit

from .validators import (
    validate_document_size,
    validate_document_type,
    validate_official_letter_size,
    validate_official_letter_type,
)

# ───────────────────────────────
#  Camp Notifications & Vacancies
# ───────────────────────────────

class CampNotification(models.Model):
    """A camp announced by a unit, with vacancies allotted per college."""

    class SendTo(models.TextChoices):
        ANO = "ano", "ANOs only"
        CADETS = "cadets", "ANOs and cadets"

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"
        CLOSED = "closed", "Closed"

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    reporting_date = models.DateField()
    reporting_time = models.TimeField()
    venue = models.CharField(max_length=200)
    official_letter = models.FileField(
        upload_to="camps/letters/",
        blank=True,
        validators=[validate_official_letter_type, validate_official_letter_size],
    )
    send_to = models.CharField(max_length=16, choices=SendTo.choices, default=SendTo.ANO)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.PUBLISHED
    )
    unit = models.ForeignKey(Unit, on_delete=models.CASCADE, related_name="camps")
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="camps_created",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    @property
    def total_vacancies(self):
        return self.vacancies.aggregate(total=Sum("count"))["total"] or 0

    def vacancy_for(self, college):
        vacancy = self.vacancies.filter(college=college).first()
        return vacancy.count if vacancy else 0

    def allotted_colleges(self):
        """Colleges that received at least one vacancy."""
        return College.objects.filter(
            camp_vacancies__camp=self, camp_vacancies__count__gt=0
        ).order_by("name")


class CampVacancy(models.Model):
    camp = models.ForeignKey(
        CampNotification, on_delete=models.CASCADE, related_name="vacancies"
    )
    college = models.ForeignKey(
        College, on_delete=models.CASCADE, related_name="camp_vacancies"
    )
    count = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["college__name"]
        constraints = [
            models.UniqueConstraint(
                fields=["camp", "college"], name="unique_vacancy_per_camp_college"
            ),
        ]

    def __str__(self):
        return f"{self.camp} - {self.college}: {self.count}"

# ───────────────────────────────
#  Cadet Submissions
# ───────────────────────────────

class CadetSubmission(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        UNDER_REVIEW = "under_review", "Under Review"
        FINALIZED = "finalized", "Finalized"
        FORWARDED = "forwarded", "Forwarded to Institute Level"
        REJECTED = "rejected", "Rejected"

    ALLOWED_TRANSITIONS = {
        Status.PENDING: {Status.UNDER_REVIEW, Status.FINALIZED, Status.REJECTED},
        Status.UNDER_REVIEW: {Status.FINALIZED, Status.REJECTED},
        Status.FINALIZED: {Status.FORWARDED},
        Status.FORWARDED: set(),
        Status.REJECTED: set(),
    }

    STATUS_DESCRIPTIONS = {
        Status.PENDING: "Your submission is waiting for the unit to start its review.",
        Status.UNDER_REVIEW: "The unit is reviewing your cadets.",
        Status.FINALIZED: "Selections for your college have been finalized.",
        Status.FORWARDED: "Selected cadets have been forwarded to institute level.",
        Status.REJECTED: "Your submission was rejected. See the feedback for details.",
    }

    camp = models.ForeignKey(
        CampNotification, on_delete=models.CASCADE, related_name="submissions"
    )
    college = models.ForeignKey(
        College, on_delete=models.CASCADE, related_name="submissions"
    )
    ano = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, related_name="cadet_submissions"
    )
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.PENDING
    )
    feedback = models.TextField(blank=True)
    submitted_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    reviewed_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="submissions_reviewed",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    finalized_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="submissions_finalized",
    )
    finalized_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-submitted_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["camp", "college"],
                condition=~Q(status="rejected"),
                name="unique_active_submission_per_camp_college",
                violation_error_message="This college already has a submission for this camp.",
            ),
        ]

    def __str__(self):
        return f"{self.college} - {self.camp} ({self.get_status_display()})"

    @property
    def status_description(self):
        return self.STATUS_DESCRIPTIONS.get(self.status, "")

    @property
    def is_locked(self):
        return self.status in (
            self.Status.FINALIZED,
            self.Status.FORWARDED,
            self.Status.REJECTED,
        )

    def can_transition_to(self, new_status):
        return new_status in self.ALLOWED_TRANSITIONS.get(self.status, set())

    def decision_counts(self):
        counts = {value: 0 for value, _ in SubmittedCadet.Decision.choices}
        counts[""] = 0
        for decision in self.cadets.values_list("decision", flat=True):
            counts[decision] = counts.get(decision, 0) + 1
        return counts


class SubmittedCadet(models.Model):
    class Decision(models.TextChoices):
        SELECTED = "selected", "Selected"
        RESERVE = "reserve", "Reserve"
        NOT_SELECTED = "not_selected", "Not Selected"

    submission = models.ForeignKey(
        CadetSubmission, on_delete=models.CASCADE, related_name="cadets"
    )
    name = models.CharField(max_length=150)
    rank = models.CharField(max_length=64, blank=True)
    email = models.EmailField()
    whatsapp_number = models.CharField(max_length=32, blank=True)
    position = models.PositiveSmallIntegerField(default=0)
    decision = models.CharField(
        max_length=16, choices=Decision.choices, blank=True, default=""
    )
    decided_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="cadet_decisions",
    )
    decided_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["position", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["submission", "email"], name="unique_cadet_email_per_submission"
            ),
        ]

    def __str__(self):
        return f"{self.rank} {self.name}".strip()


class SubmissionDocument(models.Model):
    submission = models.ForeignKey(
        CadetSubmission, on_delete=models.CASCADE, related_name="documents"
    )
    file = models.FileField(
        upload_to="camps/documents/%Y/%m/",
        validators=[validate_document_type, validate_document_size],
    )
    original_name = models.CharField(max_length=255, blank=True)
    uploaded_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True
    )
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-uploaded_at"]

    def __str__(self):
        return self.original_name or self.file.name

# ───────────────────────────────
#  College Level Results
# ───────────────────────────────

class FinalizedSelection(models.Model):
    """Snapshot of a finalized submission's selected and reserve cadets."""
    submission = models.OneToOneField(
        CadetSubmission, on_delete=models.PROTECT, related_name="finalized_selection"
    )
    camp = models.ForeignKey(
        CampNotification, on_delete=models.PROTECT, related_name="finalized_selections"
    )
    camp_title = models.CharField(max_length=200)
    college_name = models.CharField(max_length=200)
    finalized_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, related_name="+"
    )
    reviewer_name = models.CharField(max_length=150, blank=True)
    finalized_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-finalized_at"]

    def __str__(self):
        return f"{self.camp_title} - {self.college_name}"

    @property
    def selected_cadets(self):
        return self.cadets.filter(status=FinalizedCadet.Status.SELECTED)

    @property
    def reserve_cadets(self):
        return self.cadets.filter(status=FinalizedCadet.Status.RESERVE)


class FinalizedCadet(models.Model):
    class Status(models.TextChoices):
        SELECTED = "selected", "Selected"
        RESERVE = "reserve", "Reserve"

    selection = models.ForeignKey(
        FinalizedSelection, on_delete=models.CASCADE, related_name="cadets"
    )
    cadet = models.ForeignKey(
        SubmittedCadet, on_delete=models.SET_NULL, null=True, related_name="+"
    )
    name = models.CharField(max_length=150)
    rank = models.CharField(max_length=64, blank=True)
    email = models.EmailField()
    whatsapp_number = models.CharField(max_length=32, blank=True)
    status = models.CharField(max_length=16, choices=Status.choices)

    class Meta:
        ordering = ["status", "name"]

    def __str__(self):
        return f"{self.rank} {self.name} ({self.status})".strip()

# ───────────────────────────────
#  Institute Level Results
# ───────────────────────────────

class InstituteSelection(models.Model):
    STATUS = "institute-level"

    selection_date = models.DateTimeField(default=timezone.now)
    unit = models.ForeignKey(
        Unit, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, related_name="+"
    )
    status = models.CharField(max_length=32, default=STATUS, editable=False)
    total_selected = models.PositiveIntegerField(default=0)
    camp_breakdown = models.JSONField(default=dict, blank=True)
    college_breakdown = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["-selection_date"]

    def __str__(self):
        return f"Institute selection of {self.selection_date:%Y-%m-%d} ({self.total_selected})"


class InstituteSelectedCadet(models.Model):
    selection = models.ForeignKey(
        InstituteSelection, on_delete=models.CASCADE, related_name="cadets"
    )
    finalized_cadet = models.ForeignKey(
        FinalizedCadet, on_delete=models.SET_NULL, null=True, related_name="+"
    )
    camp = models.ForeignKey(
        CampNotification, on_delete=models.SET_NULL, null=True, related_name="+"
    )
    submission = models.ForeignKey(
        CadetSubmission, on_delete=models.SET_NULL, null=True, related_name="+"
    )
    camp_title = models.CharField(max_length=200)
    college_name = models.CharField(max_length=200)
    name = models.CharField(max_length=150)
    rank = models.CharField(max_length=64, blank=True)
    email = models.EmailField()
    whatsapp_number = models.CharField(max_length=32, blank=True)

    class Meta:
        ordering = ["college_name", "name"]

    def __str__(self):
        return f"{self.rank} {self.name}".strip()
