from django import forms

from core.models import College

from .models import CadetSubmission, CampNotification, FinalizedCadet, SubmissionDocument
from .selection import institute_candidates
from .validators import (
    DOCUMENT_EXTENSIONS,
    OFFICIAL_LETTER_EXTENSIONS,
    validate_document_size,
    validate_document_type,
)

VACANCY_PREFIX = "vacancy_"


class CampNotificationForm(forms.ModelForm):
    """Camp details plus one vacancy field per college of the unit."""

    class Meta:
        model = CampNotification
        fields = (
            "title",
            "description",
            "reporting_date",
            "reporting_time",
            "venue",
            "official_letter",
            "send_to",
            "status",
        )
        widgets = {
            "description": forms.Textarea(attrs={"rows": 3}),
            "reporting_date": forms.DateInput(attrs={"type": "date"}),
            "reporting_time": forms.TimeInput(attrs={"type": "time"}),
            "official_letter": forms.ClearableFileInput(
                attrs={"accept": ",".join(f".{e}" for e in OFFICIAL_LETTER_EXTENSIONS)}
            ),
        }

    def __init__(self, *args, unit=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.unit = unit
        self.colleges = list(
            College.objects.filter(unit=unit).order_by("name") if unit else []
        )
        existing = {}
        if self.instance.pk:
            existing = dict(self.instance.vacancies.values_list("college_id", "count"))
        for college in self.colleges:
            self.fields[f"{VACANCY_PREFIX}{college.pk}"] = forms.IntegerField(
                label=college.name,
                min_value=0,
                required=False,
                initial=existing.get(college.pk, 0),
            )

    def clean_title(self):
        return (self.cleaned_data.get("title") or "").strip()

    def clean_venue(self):
        return (self.cleaned_data.get("venue") or "").strip()

    def clean(self):
        cleaned = super().clean()
        if not self.colleges:
            raise forms.ValidationError("Your unit has no colleges to allot vacancies to.")
        if not any(count > 0 for _, count in self.vacancy_items()):
            raise forms.ValidationError("Allot at least one vacancy to a college.")
        return cleaned

    def vacancy_fields(self):
        return [self[f"{VACANCY_PREFIX}{c.pk}"] for c in self.colleges]

    def vacancy_items(self):
        data = getattr(self, "cleaned_data", {})
        return [
            (college, data.get(f"{VACANCY_PREFIX}{college.pk}") or 0)
            for college in self.colleges
        ]


class SubmitCadetsForm(forms.Form):
    camp = forms.ModelChoiceField(queryset=CampNotification.objects.none())
    cadets = forms.MultipleChoiceField(
        choices=(), widget=forms.CheckboxSelectMultiple, required=False
    )

    def __init__(self, *args, college=None, roster=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.college = college
        self.roster = {c.email: c for c in roster}
        self.fields["camp"].queryset = (
            CampNotification.objects.filter(
                status=CampNotification.Status.PUBLISHED,
                vacancies__college=college,
                vacancies__count__gt=0,
            ).distinct()
            if college
            else CampNotification.objects.none()
        )
        self.fields["camp"].empty_label = "Select Camp"
        self.fields["cadets"].choices = [
            (c.email, f"{c.rank} {c.name} ({c.email})") for c in roster
        ]

    def clean_cadets(self):
        emails = self.cleaned_data.get("cadets") or []
        if not emails:
            raise forms.ValidationError("Select at least one cadet.")
        return emails

    def clean(self):
        cleaned = super().clean()
        camp = cleaned.get("camp")
        if camp and self.college:
            active = CadetSubmission.objects.filter(camp=camp, college=self.college).exclude(
                status=CadetSubmission.Status.REJECTED
            )
            if active.exists():
                self.add_error("camp", "Your college has already submitted cadets for this camp.")
        return cleaned

    def selected_cadets(self):
        return [
            self.roster[email].as_dict()
            for email in self.cleaned_data.get("cadets", [])
            if email in self.roster
        ]


class SubmissionDocumentForm(forms.ModelForm):
    submission = forms.ModelChoiceField(queryset=CadetSubmission.objects.none())
    file = forms.FileField(
        validators=[validate_document_type, validate_document_size],
        widget=forms.ClearableFileInput(
            attrs={"accept": ",".join(f".{e}" for e in DOCUMENT_EXTENSIONS)}
        ),
    )

    class Meta:
        model = SubmissionDocument
        fields = ("submission", "file")

    def __init__(self, *args, ano=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["submission"].queryset = (
            CadetSubmission.objects.filter(ano=ano).select_related("camp", "college")
            if ano
            else CadetSubmission.objects.none()
        )
        self.fields["submission"].empty_label = "Select Submission"
        self.fields["submission"].label_from_instance = (
            lambda s: f"{s.camp.title} ({s.get_status_display()})"
        )


class RejectSubmissionForm(forms.Form):
    feedback = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}))

    def clean_feedback(self):
        feedback = (self.cleaned_data.get("feedback") or "").strip()
        if not feedback:
            raise forms.ValidationError("Feedback is required to reject a submission.")
        return feedback


class InstituteSelectionForm(forms.Form):
    cadets = forms.ModelMultipleChoiceField(
        queryset=FinalizedCadet.objects.none(),
        widget=forms.CheckboxSelectMultiple,
    )

    def __init__(self, *args, unit=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["cadets"].queryset = institute_candidates(unit)
        self.fields["cadets"].label_from_instance = (
            lambda c: f"{c.rank} {c.name} - {c.selection.college_name} ({c.selection.camp_title})"
        )
