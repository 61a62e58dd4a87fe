from django import forms
from django.contrib.auth.models import User
from django.db.models import Q

from .models import AnoContact, College, Profile, Unit


def users_with_role(role):
    return User.objects.filter(profile__role=role, is_superuser=False).order_by(
        "first_name", "username"
    )


class UserChoiceField(forms.ModelChoiceField):
    def label_from_instance(self, obj):
        name = obj.get_full_name() or obj.username
        return f"{name} ({obj.email})" if obj.email else name


class UserMultipleChoiceField(forms.ModelMultipleChoiceField):
    def label_from_instance(self, obj):
        name = obj.get_full_name() or obj.username
        return f"{name} ({obj.email})" if obj.email else name


class UnitForm(forms.ModelForm):
    co = UserChoiceField(queryset=User.objects.none(), label="Commanding Officer")
    clerk = UserChoiceField(queryset=User.objects.none(), label="Clerk")

    class Meta:
        model = Unit
        fields = ("name", "co", "clerk")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["co"].queryset = users_with_role(Profile.Role.CO)
        self.fields["clerk"].queryset = users_with_role(Profile.Role.CLERK)
        self.fields["co"].empty_label = "Select CO"
        self.fields["clerk"].empty_label = "Select Clerk"

    def clean_name(self):
        return (self.cleaned_data.get("name") or "").strip()

    def clean(self):
        cleaned = super().clean()
        co = cleaned.get("co")
        clerk = cleaned.get("clerk")
        if co and clerk and co == clerk:
            raise forms.ValidationError("CO and clerk must be different users.")

        others = Unit.objects.all()
        if self.instance.pk:
            others = others.exclude(pk=self.instance.pk)
        for field, user in (("co", co), ("clerk", clerk)):
            if user and others.filter(Q(co=user) | Q(clerk=user)).exists():
                self.add_error(field, "This user is already assigned to another unit.")
        return cleaned


class CollegeForm(forms.ModelForm):
    anos = UserMultipleChoiceField(
        queryset=User.objects.none(),
        label="ANOs",
        widget=forms.CheckboxSelectMultiple,
    )

    class Meta:
        model = College
        fields = ("name", "unit", "anos")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["anos"].queryset = users_with_role(Profile.Role.ANO)
        self.fields["unit"].queryset = Unit.objects.order_by("name")
        self.fields["unit"].empty_label = "Select Unit"

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        clash = College.objects.filter(name__iexact=name)
        if self.instance.pk:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise forms.ValidationError("A college with this name already exists.")
        return name

    def clean_anos(self):
        anos = self.cleaned_data.get("anos")
        if not anos:
            raise forms.ValidationError("Assign at least one ANO.")
        taken = College.objects.filter(anos__in=anos)
        if self.instance.pk:
            taken = taken.exclude(pk=self.instance.pk)
        taken_names = sorted(
            {
                u.get_full_name() or u.username
                for u in User.objects.filter(ano_colleges__in=taken, pk__in=[a.pk for a in anos])
            }
        )
        if taken_names:
            raise forms.ValidationError(
                "Already assigned to another college: %s" % ", ".join(taken_names)
            )
        return anos


class AnoContactForm(forms.ModelForm):
    class Meta:
        model = AnoContact
        fields = ("name", "rank", "email", "whatsapp_number")

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip().lower()
        clash = AnoContact.objects.filter(email=email)
        if self.instance.pk:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise forms.ValidationError("A contact with this email already exists.")
        return email

    def clean_name(self):
        return (self.cleaned_data.get("name") or "").strip()
