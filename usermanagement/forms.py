from django import forms
from django.contrib.auth.models import User
from django.contrib.auth.password_validation import validate_password

from core.models import Profile

MANAGED_ROLES = [
    (Profile.Role.ANO, "ANO"),
    (Profile.Role.CLERK, "Clerk"),
    (Profile.Role.CO, "CO"),
]


class UserAccountForm(forms.Form):
    """Create or edit a non-admin account; the e-mail doubles as the username."""

    name = forms.CharField(max_length=150)
    email = forms.EmailField()
    role = forms.ChoiceField(choices=MANAGED_ROLES)
    password = forms.CharField(widget=forms.PasswordInput, required=False)

    def __init__(self, *args, user=None, **kwargs):
        self.user = user
        if user is not None:
            kwargs.setdefault(
                "initial",
                {
                    "name": user.get_full_name(),
                    "email": user.email,
                    "role": getattr(getattr(user, "profile", None), "role", ""),
                },
            )
        super().__init__(*args, **kwargs)
        if user is None:
            self.fields["password"].required = True
        else:
            self.fields["password"].help_text = "Leave blank to keep the current password."

    def clean_name(self):
        return (self.cleaned_data.get("name") or "").strip()

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip().lower()
        clash = User.objects.filter(email__iexact=email) | User.objects.filter(
            username__iexact=email
        )
        if self.user is not None:
            clash = clash.exclude(pk=self.user.pk)
        if clash.exists():
            raise forms.ValidationError("A user with this email already exists.")
        return email

    def clean_password(self):
        password = self.cleaned_data.get("password") or ""
        if password:
            validate_password(password, self.user)
        return password

    def save(self):
        data = self.cleaned_data
        first, _, last = data["name"].partition(" ")
        user = self.user or User(username=data["email"])
        user.username = data["email"]
        user.email = data["email"]
        user.first_name = first
        user.last_name = last
        if data["password"]:
            user.set_password(data["password"])
        user.save()

        profile, _ = Profile.objects.get_or_create(user=user)
        if profile.role != data["role"]:
            profile.role = data["role"]
            profile.save(update_fields=["role"])
        return user
