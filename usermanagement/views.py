import logging

from django.contrib import messages
from django.contrib.auth.models import User
from django.db import transaction
from django.db.models import ProtectedError, Q
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from core.decorators import admin_required
from core.models import Profile, log_action

from .forms import UserAccountForm

logger = logging.getLogger(__name__)


def _managed_users():
    return (
        User.objects.filter(is_superuser=False)
        .exclude(profile__role=Profile.Role.ADMIN)
        .select_related("profile")
    )


@admin_required
def user_list(request):
    query = (request.GET.get("q") or "").strip()
    users = _managed_users().order_by("first_name", "last_name", "email")
    if query:
        users = users.filter(
            Q(first_name__icontains=query)
            | Q(last_name__icontains=query)
            | Q(email__icontains=query)
            | Q(profile__role__icontains=query)
        )
    return render(request, "usermanagement/user_list.html", {"users": users, "q": query})


@admin_required
@require_http_methods(["GET", "POST"])
def user_create(request):
    form = UserAccountForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        with transaction.atomic():
            user = form.save()
        log_action(
            request.user,
            "user.create",
            f"Created {user.profile.role} account {user.email}",
            user_id=user.pk,
        )
        logger.info("User %s created with role %s", user.email, user.profile.role)
        messages.success(request, f"User {user.email} created.")
        return redirect("usermanagement:user_list")
    return render(request, "usermanagement/user_form.html", {"form": form, "is_edit": False})


@admin_required
@require_http_methods(["GET", "POST"])
def user_edit(request, pk):
    target = get_object_or_404(_managed_users(), pk=pk)
    form = UserAccountForm(request.POST or None, user=target)
    if request.method == "POST" and form.is_valid():
        with transaction.atomic():
            user = form.save()
        log_action(request.user, "user.update", f"Updated account {user.email}", user_id=user.pk)
        messages.success(request, f"User {user.email} updated.")
        return redirect("usermanagement:user_list")
    return render(
        request,
        "usermanagement/user_form.html",
        {"form": form, "is_edit": True, "target": target},
    )


@admin_required
@require_POST
def user_delete(request, pk):
    target = get_object_or_404(_managed_users(), pk=pk)
    email = target.email
    try:
        target.delete()
    except ProtectedError:
        messages.error(
            request,
            f"{email} is still assigned to a unit. Reassign the unit before deleting.",
        )
        return redirect("usermanagement:user_list")
    log_action(request.user, "user.delete", f"Deleted account {email}")
    messages.success(request, f"User {email} deleted.")
    return redirect("usermanagement:user_list")
