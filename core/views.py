import logging

from django.contrib.auth import logout
from django.contrib.auth.decorators import login_required
from django.contrib.auth.models import User
from django.db.models import Count, Q, Sum
from django.http import HttpResponseForbidden
from django.shortcuts import redirect, render

from .models import ActivityLog, College, Profile, get_user_role
from .utils import college_for_ano, unit_for_reviewer

logger = logging.getLogger(__name__)


def custom_logout(request):
    logout(request)
    return redirect("account_login")


@login_required
def dashboard(request):
    """Render the dashboard that matches the user's role."""
    role = get_user_role(request.user)
    if role == Profile.Role.ADMIN:
        return _render_admin_dashboard(request)
    if role == Profile.Role.ANO:
        return _render_ano_dashboard(request)
    if role in Profile.REVIEWER_ROLES:
        return _render_reviewer_dashboard(request)
    logger.warning("User %s has no usable role", request.user)
    return HttpResponseForbidden("Your account has no role assigned.")


def _render_admin_dashboard(request):
    from camps.models import CadetSubmission, CampNotification

    stats = {
        "total_users": User.objects.filter(is_superuser=False)
        .exclude(profile__role=Profile.Role.ADMIN)
        .count(),
        "active_camps": CampNotification.objects.filter(
            status=CampNotification.Status.PUBLISHED
        ).count(),
        "colleges": College.objects.count(),
        "pending_reviews": CadetSubmission.objects.filter(
            status__in=[CadetSubmission.Status.PENDING, CadetSubmission.Status.UNDER_REVIEW]
        ).count(),
    }
    recent_activity = ActivityLog.objects.select_related("user")[:10]
    return render(
        request,
        "core/admin_dashboard.html",
        {"stats": stats, "recent_activity": recent_activity},
    )


def _render_ano_dashboard(request):
    from camps.models import CadetSubmission, CampVacancy, SubmittedCadet

    college = college_for_ano(request.user)
    stats = {"assigned_camps": 0, "total_vacancies": 0, "submitted_cadets": 0, "pending_documents": 0}
    recent = CadetSubmission.objects.none()
    if college is not None:
        allotted = CampVacancy.objects.filter(college=college, count__gt=0)
        submissions = CadetSubmission.objects.filter(college=college)
        stats = {
            "assigned_camps": allotted.count(),
            "total_vacancies": allotted.aggregate(total=Sum("count"))["total"] or 0,
            "submitted_cadets": SubmittedCadet.objects.filter(
                submission__in=submissions
            ).count(),
            "pending_documents": submissions.annotate(doc_count=Count("documents"))
            .filter(doc_count=0)
            .count(),
        }
        recent = submissions.select_related("camp")[:5]
    return render(
        request,
        "core/ano_dashboard.html",
        {"college": college, "stats": stats, "recent_submissions": recent},
    )


def _render_reviewer_dashboard(request):
    from camps.models import CadetSubmission, SubmittedCadet

    unit = unit_for_reviewer(request.user)
    stats = {"pending_review": 0, "verified_cadets": 0, "finalized_camps": 0, "total_cadets": 0}
    pending = CadetSubmission.objects.none()
    if unit is not None:
        submissions = CadetSubmission.objects.filter(college__unit=unit)
        open_statuses = [CadetSubmission.Status.PENDING, CadetSubmission.Status.UNDER_REVIEW]
        cadets = SubmittedCadet.objects.filter(submission__in=submissions)
        stats = {
            "pending_review": submissions.filter(status__in=open_statuses).count(),
            "verified_cadets": cadets.filter(
                decision=SubmittedCadet.Decision.SELECTED
            ).count(),
            "finalized_camps": submissions.filter(
                Q(status=CadetSubmission.Status.FINALIZED)
                | Q(status=CadetSubmission.Status.FORWARDED)
            )
            .values("camp_id")
            .distinct()
            .count(),
            "total_cadets": cadets.count(),
        }
        pending = (
            submissions.filter(status__in=open_statuses)
            .select_related("camp", "college")
            .annotate(cadet_count=Count("cadets"))[:10]
        )
    return render(
        request,
        "core/reviewer_dashboard.html",
        {"unit": unit, "stats": stats, "pending_submissions": pending},
    )
