# Generated manually for the camp notification and selection pipeline.

import camps.validators
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("core", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CampNotification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("reporting_date", models.DateField()),
                ("reporting_time", models.TimeField()),
                ("venue", models.CharField(max_length=200)),
                (
                    "official_letter",
                    models.FileField(
                        blank=True,
                        upload_to="camps/letters/",
                        validators=[
                            django.core.validators.FileExtensionValidator(["pdf", "jpg", "jpeg", "png"]),
                            camps.validators.MaxFileSizeValidator(5),
                        ],
                    ),
                ),
                (
                    "send_to",
                    models.CharField(
                        choices=[("ano", "ANOs only"), ("cadets", "ANOs and cadets")],
                        default="ano",
                        max_length=16,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("published", "Published"), ("closed", "Closed")],
                        default="published",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="camps_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="camps",
                        to="core.unit",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="CampVacancy",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("count", models.PositiveIntegerField(default=0)),
                (
                    "camp",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vacancies",
                        to="camps.campnotification",
                    ),
                ),
                (
                    "college",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="camp_vacancies",
                        to="core.college",
                    ),
                ),
            ],
            options={
                "ordering": ["college__name"],
                "constraints": [
                    models.UniqueConstraint(fields=("camp", "college"), name="unique_vacancy_per_camp_college"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CadetSubmission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("under_review", "Under Review"),
                            ("finalized", "Finalized"),
                            ("forwarded", "Forwarded to Institute Level"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("feedback", models.TextField(blank=True)),
                ("submitted_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("finalized_at", models.DateTimeField(blank=True, null=True)),
                (
                    "ano",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="cadet_submissions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "camp",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="submissions",
                        to="camps.campnotification",
                    ),
                ),
                (
                    "college",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="submissions",
                        to="core.college",
                    ),
                ),
                (
                    "finalized_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="submissions_finalized",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "reviewed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="submissions_reviewed",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-submitted_at"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "rejected"), _negated=True),
                        fields=("camp", "college"),
                        name="unique_active_submission_per_camp_college",
                        violation_error_message="This college already has a submission for this camp.",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SubmittedCadet",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("rank", models.CharField(blank=True, max_length=64)),
                ("email", models.EmailField(max_length=254)),
                ("whatsapp_number", models.CharField(blank=True, max_length=32)),
                ("position", models.PositiveSmallIntegerField(default=0)),
                (
                    "decision",
                    models.CharField(
                        blank=True,
                        choices=[("selected", "Selected"), ("reserve", "Reserve"), ("not_selected", "Not Selected")],
                        default="",
                        max_length=16,
                    ),
                ),
                ("decided_at", models.DateTimeField(blank=True, null=True)),
                (
                    "decided_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="cadet_decisions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "submission",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cadets",
                        to="camps.cadetsubmission",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("submission", "email"), name="unique_cadet_email_per_submission"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SubmissionDocument",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "file",
                    models.FileField(
                        upload_to="camps/documents/%Y/%m/",
                        validators=[
                            django.core.validators.FileExtensionValidator(["pdf", "jpg", "jpeg", "png", "doc", "docx"]),
                            camps.validators.MaxFileSizeValidator(10),
                        ],
                    ),
                ),
                ("original_name", models.CharField(blank=True, max_length=255)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
                (
                    "submission",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="documents",
                        to="camps.cadetsubmission",
                    ),
                ),
                (
                    "uploaded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-uploaded_at"],
            },
        ),
        migrations.CreateModel(
            name="FinalizedSelection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("camp_title", models.CharField(max_length=200)),
                ("college_name", models.CharField(max_length=200)),
                ("reviewer_name", models.CharField(blank=True, max_length=150)),
                ("finalized_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "camp",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="finalized_selections",
                        to="camps.campnotification",
                    ),
                ),
                (
                    "finalized_by",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "submission",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="finalized_selection",
                        to="camps.cadetsubmission",
                    ),
                ),
            ],
            options={
                "ordering": ["-finalized_at"],
            },
        ),
        migrations.CreateModel(
            name="FinalizedCadet",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("rank", models.CharField(blank=True, max_length=64)),
                ("email", models.EmailField(max_length=254)),
                ("whatsapp_number", models.CharField(blank=True, max_length=32)),
                (
                    "status",
                    models.CharField(choices=[("selected", "Selected"), ("reserve", "Reserve")], max_length=16),
                ),
                (
                    "cadet",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="camps.submittedcadet",
                    ),
                ),
                (
                    "selection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cadets",
                        to="camps.finalizedselection",
                    ),
                ),
            ],
            options={
                "ordering": ["status", "name"],
            },
        ),
        migrations.CreateModel(
            name="InstituteSelection",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("selection_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("status", models.CharField(default="institute-level", editable=False, max_length=32)),
                ("total_selected", models.PositiveIntegerField(default=0)),
                ("camp_breakdown", models.JSONField(blank=True, default=dict)),
                ("college_breakdown", models.JSONField(blank=True, default=dict)),
                (
                    "created_by",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "unit",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="core.unit",
                    ),
                ),
            ],
            options={
                "ordering": ["-selection_date"],
            },
        ),
        migrations.CreateModel(
            name="InstituteSelectedCadet",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("camp_title", models.CharField(max_length=200)),
                ("college_name", models.CharField(max_length=200)),
                ("name", models.CharField(max_length=150)),
                ("rank", models.CharField(blank=True, max_length=64)),
                ("email", models.EmailField(max_length=254)),
                ("whatsapp_number", models.CharField(blank=True, max_length=32)),
                (
                    "camp",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="camps.campnotification",
                    ),
                ),
                (
                    "finalized_cadet",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="camps.finalizedcadet",
                    ),
                ),
                (
                    "selection",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cadets",
                        to="camps.instituteselection",
                    ),
                ),
                (
                    "submission",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="camps.cadetsubmission",
                    ),
                ),
            ],
            options={
                "ordering": ["college_name", "name"],
            },
        ),
    ]
