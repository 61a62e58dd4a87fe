import logging
import sys

from django.contrib.auth.models import User
from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import ActivityLog, Profile, get_user_role
from .utils import client_ip

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_or_update_user_profile(sender, instance, created, **kwargs):
    # Skip during loaddata to avoid duplicate errors
    if "loaddata" in sys.argv:
        return

    if created:
        role = Profile.Role.ADMIN if instance.is_superuser else Profile.Role.ANO
        Profile.objects.create(user=instance, role=role)
    elif not Profile.objects.filter(user=instance).exists():
        Profile.objects.create(user=instance)


@receiver(user_logged_in)
def assign_role_on_login(sender, user, request, **kwargs):
    """Ensure the user has a profile and audit the login with their role."""
    if request is None:
        return

    Profile.objects.get_or_create(user=user)
    role = get_user_role(user)

    ActivityLog.objects.create(
        user=user,
        action="login",
        description=f"{user.get_full_name() or user.username} signed in as {role}",
        ip_address=client_ip(request),
    )
    logger.info("User %s logged in with role %s", user.username, role)


@receiver(user_logged_out)
def log_logout(sender, user, request, **kwargs):
    if user is None:
        return
    ActivityLog.objects.create(
        user=user,
        action="logout",
        description=f"{user.get_full_name() or user.username} signed out",
        ip_address=client_ip(request) if request is not None else None,
    )
