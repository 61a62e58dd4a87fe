from django.conf import settings
from django.contrib.auth.models import User
from django.core.validators import RegexValidator
from django.db import models
from django.db.models.functions import Lower

# ───────────────────────────────
#  User Profile & Roles
# ───────────────────────────────

class Profile(models.Model):
    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        ANO = "ano", "ANO"
        CLERK = "clerk", "Clerk"
        CO = "co", "CO"

    REVIEWER_ROLES = (Role.CLERK, Role.CO)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.ANO)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user.username} ({self.role})"

    @property
    def is_reviewer(self):
        return self.role in self.REVIEWER_ROLES


def get_user_role(user):
    """Return the effective role key for ``user`` (superusers are admins)."""
    if not getattr(user, "is_authenticated", False):
        return None
    if user.is_superuser:
        return Profile.Role.ADMIN
    profile = getattr(user, "profile", None)
    return getattr(profile, "role", None)

# ───────────────────────────────
#  Organisation: Units & Colleges
# ───────────────────────────────

class Unit(models.Model):
    """A training unit commanded by a CO and administered by a clerk."""
    name = models.CharField(max_length=150, unique=True)
    co = models.ForeignKey(
        User, on_delete=models.PROTECT, related_name="units_commanded"
    )
    clerk = models.ForeignKey(
        User, on_delete=models.PROTECT, related_name="units_clerked"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["co"],
                name="unique_unit_co",
                violation_error_message="This CO already commands another unit.",
            ),
            models.UniqueConstraint(
                fields=["clerk"],
                name="unique_unit_clerk",
                violation_error_message="This clerk is already assigned to another unit.",
            ),
            models.CheckConstraint(
                condition=~models.Q(co=models.F("clerk")),
                name="unit_co_differs_from_clerk",
                violation_error_message="CO and clerk must be different users.",
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def college_names(self):
        return [c.name for c in self.colleges.all()]


class College(models.Model):
    name = models.CharField(max_length=200)
    unit = models.ForeignKey(Unit, on_delete=models.CASCADE, related_name="colleges")
    anos = models.ManyToManyField(User, blank=True, related_name="ano_colleges")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                Lower("name"),
                name="unique_college_name_ci",
                violation_error_message="A college with this name already exists.",
            ),
        ]

    def __str__(self):
        return self.name

# ───────────────────────────────
#  ANO Contact Directory (local)
# ───────────────────────────────

whatsapp_number_validator = RegexValidator(
    regex=r"^\+[\d\s\-()]+$",
    message="Enter the number with country code, e.g. +91 98765 43210.",
)


class AnoContact(models.Model):
    RANK_CHOICES = [
        ("Lieutenant", "Lieutenant"),
        ("Captain", "Captain"),
        ("Major", "Major"),
        ("Lieutenant Colonel", "Lieutenant Colonel"),
        ("Colonel", "Colonel"),
        ("Brigadier", "Brigadier"),
    ]

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150)
    rank = models.CharField(max_length=32, choices=RANK_CHOICES)
    whatsapp_number = models.CharField(
        max_length=32, validators=[whatsapp_number_validator]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.rank} {self.name}"

    def save(self, *args, **kwargs):
        self.email = (self.email or "").strip().lower()
        self.name = (self.name or "").strip()
        self.whatsapp_number = (self.whatsapp_number or "").strip()
        super().save(*args, **kwargs)

# ───────────────────────────────
#  Audit Trail
# ───────────────────────────────

class ActivityLog(models.Model):
    """Generic activity log for auditing system actions"""
    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activity_logs",
    )
    action = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True)

    class Meta:
        ordering = ["-timestamp"]

    def __str__(self):
        return f"{self.timestamp} - {self.user} - {self.action}"

    def generate_description(self):
        """Build a concise plain-language description when none is provided."""
        params = {}
        if isinstance(self.metadata, dict):
            params = {k: v for k, v in self.metadata.items() if k != "user_agent"}

        username = "someone"
        if self.user:
            username = self.user.get_full_name() or self.user.username

        method, _, path = (self.action or "").partition(" ")
        verb_map = {
            "GET": "viewed",
            "POST": "submitted",
            "PUT": "updated",
            "PATCH": "updated",
            "DELETE": "deleted",
        }
        verb = verb_map.get(method.upper(), method.lower())

        path = path.split("?")[0]
        segments = [seg for seg in path.strip("/").split("/") if not seg.isdigit()]
        resource = " ".join(segments).replace("-", " ").strip() or "resource"

        obj_title = params.get("object_title") or params.get("title")
        description = f"{username} {verb} {resource}".strip()
        if obj_title:
            description += f' "{obj_title}"'

        return description

    def save(self, *args, **kwargs):
        if not self.description:
            self.description = self.generate_description()
        super().save(*args, **kwargs)


def log_action(user, action, description="", **metadata):
    """Record a domain action (as opposed to a raw request) in the audit log."""
    return ActivityLog.objects.create(
        user=user if getattr(user, "is_authenticated", False) else None,
        action=action,
        description=description,
        metadata=metadata or None,
    )
