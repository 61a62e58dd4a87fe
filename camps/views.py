import logging

from django.contrib import messages
from django.db import transaction
from django.db.models import Count, ProtectedError, Q, Sum
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from core.decorators import ano_required, reviewer_required
from core.models import log_action
from core.utils import college_for_ano, unit_for_reviewer
from core.utils_email import resolve_unit_reviewer_emails, send_notification
from directory.notifications import send_camp_notification
from directory.sheets import DirectoryError, fetch_cadet_roster, roster_for_college

from .forms import CampNotificationForm, SubmissionDocumentForm, SubmitCadetsForm
from .models import CadetSubmission, CampNotification, CampVacancy, SubmissionDocument
from .selection import SelectionError, create_submission

logger = logging.getLogger(__name__)

# ───────────────────────────────
#  Camp Notifications (clerk / CO)
# ───────────────────────────────

def _unit_or_message(request):
    unit = unit_for_reviewer(request.user)
    if unit is None:
        messages.warning(request, "You are not assigned to a unit yet. Contact the administrator.")
    return unit


def _save_vacancies(camp, form):
    for college, count in form.vacancy_items():
        CampVacancy.objects.update_or_create(
            camp=camp, college=college, defaults={"count": count}
        )


@reviewer_required
def notification_list(request):
    unit = _unit_or_message(request)
    camps = CampNotification.objects.none()
    query = (request.GET.get("q") or "").strip()
    if unit is not None:
        camps = (
            CampNotification.objects.filter(unit=unit)
            .annotate(total_vacancies_sum=Sum("vacancies__count"))
            .select_related("created_by")
        )
        if query:
            camps = camps.filter(
                Q(title__icontains=query)
                | Q(venue__icontains=query)
                | Q(send_to__icontains=query)
            )
    return render(
        request,
        "camps/notification_list.html",
        {"camps": camps, "unit": unit, "q": query},
    )


@reviewer_required
def notification_create(request):
    unit = _unit_or_message(request)
    if unit is None:
        return redirect("camps:notification_list")

    form = CampNotificationForm(request.POST or None, request.FILES or None, unit=unit)
    if request.method == "POST" and form.is_valid():
        with transaction.atomic():
            camp = form.save(commit=False)
            camp.unit = unit
            camp.created_by = request.user
            camp.save()
            _save_vacancies(camp, form)

        log_action(
            request.user,
            "camp.create",
            f"Created camp notification {camp.title}",
            camp_id=camp.pk,
            title=camp.title,
        )
        messages.success(request, f"Camp notification '{camp.title}' created.")

        summary = send_camp_notification(
            camp, sender_name=request.user.get_full_name() or request.user.username
        )
        if summary.error and not summary.total:
            messages.warning(request, f"WhatsApp notifications not sent: {summary.error}")
        else:
            level = messages.SUCCESS if summary.success else messages.WARNING
            messages.add_message(
                request,
                level,
                f"WhatsApp notifications: {summary.sent} sent, {summary.failed} failed "
                f"out of {summary.total}.",
            )
            if summary.error:
                messages.warning(request, summary.error)
        return redirect("camps:notification_list")

    return render(
        request,
        "camps/notification_form.html",
        {"form": form, "unit": unit, "is_edit": False},
    )


@reviewer_required
def notification_edit(request, pk):
    unit = _unit_or_message(request)
    camp = get_object_or_404(CampNotification, pk=pk, unit=unit)
    request.object = camp

    form = CampNotificationForm(
        request.POST or None, request.FILES or None, instance=camp, unit=unit
    )
    if request.method == "POST" and form.is_valid():
        with transaction.atomic():
            camp = form.save()
            _save_vacancies(camp, form)
        log_action(
            request.user,
            "camp.update",
            f"Updated camp notification {camp.title}",
            camp_id=camp.pk,
        )
        messages.success(request, f"Camp notification '{camp.title}' updated.")
        return redirect("camps:notification_list")

    return render(
        request,
        "camps/notification_form.html",
        {"form": form, "unit": unit, "camp": camp, "is_edit": True},
    )


@reviewer_required
@require_POST
def notification_delete(request, pk):
    unit = unit_for_reviewer(request.user)
    camp = get_object_or_404(CampNotification, pk=pk, unit=unit)
    title = camp.title
    try:
        camp.delete()
    except ProtectedError:
        messages.error(
            request,
            f"Camp notification '{title}' has finalized selections and cannot be deleted.",
        )
        return redirect("camps:notification_list")
    log_action(request.user, "camp.delete", f"Deleted camp notification {title}", camp_id=pk)
    messages.success(request, f"Camp notification '{title}' deleted.")
    return redirect("camps:notification_list")

# ───────────────────────────────
#  ANO pages
# ───────────────────────────────

def _college_or_message(request):
    college = college_for_ano(request.user)
    if college is None:
        messages.warning(request, "You are not assigned to a college yet. Contact the administrator.")
    return college


@ano_required
def vacancies(request):
    college = _college_or_message(request)
    rows = []
    if college is not None:
        allotted = (
            CampVacancy.objects.filter(college=college)
            .select_related("camp")
            .order_by("-camp__created_at")
        )
        submitted = set(
            CadetSubmission.objects.filter(college=college)
            .exclude(status=CadetSubmission.Status.REJECTED)
            .values_list("camp_id", flat=True)
        )
        rows = [
            {"camp": v.camp, "count": v.count, "submitted": v.camp_id in submitted}
            for v in allotted
        ]
    return render(
        request, "camps/vacancies.html", {"college": college, "rows": rows}
    )


@ano_required
def submit_cadets(request):
    college = _college_or_message(request)
    if college is None:
        return render(request, "camps/submit_cadets.html", {"college": None})

    roster = []
    roster_error = ""
    try:
        roster = roster_for_college(fetch_cadet_roster(), college.name)
    except DirectoryError as exc:
        roster_error = str(exc)
        logger.warning("Cadet roster unavailable for %s: %s", college, exc)

    initial = {}
    if request.GET.get("camp"):
        initial["camp"] = request.GET["camp"]
    form = SubmitCadetsForm(
        request.POST or None, college=college, roster=roster, initial=initial
    )

    if request.method == "POST" and form.is_valid():
        camp = form.cleaned_data["camp"]
        try:
            submission = create_submission(
                camp, college, request.user, form.selected_cadets()
            )
        except SelectionError as exc:
            messages.error(request, str(exc))
        else:
            messages.success(
                request,
                f"Submitted {submission.cadets.count()} cadets for {camp.title}.",
            )
            send_notification(
                subject=f"Cadet submission: {college.name} - {camp.title}",
                body=(
                    f"{college.name} has submitted {submission.cadets.count()} cadets "
                    f"for {camp.title}. Please review them in the NCC ERP portal."
                ),
                to=resolve_unit_reviewer_emails(college.unit),
            )
            return redirect("camps:track_status")

    return render(
        request,
        "camps/submit_cadets.html",
        {
            "college": college,
            "form": form,
            "roster": roster,
            "roster_error": roster_error,
        },
    )


@ano_required
def upload_documents(request):
    form = SubmissionDocumentForm(
        request.POST or None, request.FILES or None, ano=request.user
    )
    if request.method == "POST" and form.is_valid():
        document = form.save(commit=False)
        document.uploaded_by = request.user
        document.original_name = request.FILES["file"].name
        document.save()
        log_action(
            request.user,
            "document.upload",
            f"Uploaded {document.original_name}",
            submission_id=document.submission_id,
        )
        messages.success(request, f"Uploaded {document.original_name}.")
        return redirect("camps:upload_documents")

    documents = (
        SubmissionDocument.objects.filter(submission__ano=request.user)
        .select_related("submission", "submission__camp")
    )
    return render(
        request,
        "camps/upload_documents.html",
        {"form": form, "documents": documents},
    )


@ano_required
def track_status(request):
    submissions = (
        CadetSubmission.objects.filter(ano=request.user)
        .select_related("camp", "college", "reviewed_by")
        .annotate(cadet_count=Count("cadets", distinct=True))
        .prefetch_related("documents", "cadets")
    )
    return render(request, "camps/track_status.html", {"submissions": submissions})
