import logging

from django.contrib import messages
from django.db.models import Count, Q
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from core.decorators import reviewer_required
from core.utils import unit_for_reviewer
from core.utils_email import resolve_college_ano_emails, send_notification
from directory.notifications import notify_cadet_selection, notify_institute_selection

from .exports import finalized_selections_csv, institute_selection_csv
from .forms import InstituteSelectionForm, RejectSubmissionForm
from .models import (
    CadetSubmission,
    CampNotification,
    FinalizedCadet,
    FinalizedSelection,
    InstituteSelection,
    SubmittedCadet,
)
from .selection import (
    SelectionError,
    create_institute_selection,
    finalize_submission,
    record_decision,
    reject_submission,
)

logger = logging.getLogger(__name__)


def _unit_submission(request, pk):
    unit = unit_for_reviewer(request.user)
    if unit is None:
        raise Http404("No unit assigned")
    return get_object_or_404(
        CadetSubmission.objects.select_related("camp", "college", "ano"),
        pk=pk,
        college__unit=unit,
    )


def _apply_decision(request, submission, cadet_id, decision):
    """Record one decision and message the cadet when it warrants it."""
    cadet, notify = record_decision(submission.pk, cadet_id, decision, request.user)
    delivered = None
    if notify:
        delivered = notify_cadet_selection(cadet, decision).success
    return cadet, delivered

# ───────────────────────────────
#  Review
# ───────────────────────────────

@reviewer_required
def review_list(request):
    unit = unit_for_reviewer(request.user)
    if unit is None:
        messages.warning(request, "You are not assigned to a unit yet. Contact the administrator.")

    submissions = CadetSubmission.objects.none()
    camps = CampNotification.objects.none()
    camp_id = request.GET.get("camp") or ""
    query = (request.GET.get("q") or "").strip()
    if unit is not None:
        submissions = (
            CadetSubmission.objects.filter(
                college__unit=unit,
                status__in=[
                    CadetSubmission.Status.PENDING,
                    CadetSubmission.Status.UNDER_REVIEW,
                ],
            )
            .select_related("camp", "college", "ano")
            .annotate(cadet_count=Count("cadets", distinct=True))
        )
        camps = CampNotification.objects.filter(unit=unit)
        if camp_id.isdigit():
            submissions = submissions.filter(camp_id=camp_id)
        if query:
            submissions = submissions.filter(
                Q(college__name__icontains=query) | Q(cadets__name__icontains=query)
            ).distinct()

    return render(
        request,
        "camps/review_list.html",
        {
            "submissions": submissions,
            "camps": camps,
            "camp_id": camp_id,
            "q": query,
            "unit": unit,
        },
    )


@reviewer_required
def review_detail(request, pk):
    submission = _unit_submission(request, pk)
    request.object = submission.camp

    if request.method == "POST":
        changed = 0
        notified = 0
        try:
            for cadet in submission.cadets.all():
                decision = request.POST.get(f"decision_{cadet.pk}") or ""
                if not decision or decision == cadet.decision:
                    continue
                _, delivered = _apply_decision(request, submission, cadet.pk, decision)
                changed += 1
                notified += 1 if delivered else 0
        except SelectionError as exc:
            messages.error(request, str(exc))
        else:
            messages.success(
                request,
                f"Saved {changed} decision(s); {notified} WhatsApp update(s) sent.",
            )
        return redirect("camps:review_detail", pk=submission.pk)

    return render(
        request,
        "camps/review_detail.html",
        {
            "submission": submission,
            "cadets": submission.cadets.all(),
            "documents": submission.documents.all(),
            "decisions": SubmittedCadet.Decision.choices,
            "vacancy": submission.camp.vacancy_for(submission.college),
            "counts": submission.decision_counts(),
            "reject_form": RejectSubmissionForm(),
        },
    )


@reviewer_required
@require_POST
def cadet_decision(request, pk, cadet_id):
    """JSON endpoint used by the review page to save a single decision."""
    submission = _unit_submission(request, pk)
    decision = request.POST.get("decision", "")
    try:
        cadet, delivered = _apply_decision(request, submission, cadet_id, decision)
    except SelectionError as exc:
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)
    return JsonResponse(
        {
            "ok": True,
            "cadet": cadet.pk,
            "decision": cadet.decision,
            "notified": delivered,
        }
    )


@reviewer_required
@require_POST
def reject(request, pk):
    submission = _unit_submission(request, pk)
    form = RejectSubmissionForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Feedback is required to reject a submission.")
        return redirect("camps:review_detail", pk=submission.pk)
    try:
        reject_submission(submission.pk, request.user, form.cleaned_data["feedback"])
    except SelectionError as exc:
        messages.error(request, str(exc))
        return redirect("camps:review_detail", pk=submission.pk)
    send_notification(
        subject=f"Cadet submission returned: {submission.camp.title}",
        body=(
            f"The cadet submission of {submission.college.name} for {submission.camp.title} "
            f"was rejected.\n\nFeedback: {form.cleaned_data['feedback']}\n\n"
            "You may correct it and submit again from the NCC ERP portal."
        ),
        to=resolve_college_ano_emails(submission.college),
    )
    messages.success(request, f"Submission from {submission.college.name} rejected.")
    return redirect("camps:review_list")


@reviewer_required
@require_POST
def finalize(request, pk):
    submission = _unit_submission(request, pk)
    try:
        _, finalized = finalize_submission(submission.pk, request.user)
    except SelectionError as exc:
        messages.error(request, str(exc))
        return redirect("camps:review_detail", pk=submission.pk)

    if finalized is None:
        messages.info(
            request,
            f"{submission.college.name} finalized with no selected or reserve cadets.",
        )
    else:
        messages.success(
            request,
            f"Finalized {submission.college.name}: "
            f"{finalized.selected_cadets.count()} selected, "
            f"{finalized.reserve_cadets.count()} reserve.",
        )
    return redirect("camps:finalized_list")

# ───────────────────────────────
#  Finalized selections
# ───────────────────────────────

def _finalized_queryset(request):
    unit = unit_for_reviewer(request.user)
    if unit is None:
        return FinalizedSelection.objects.none(), None
    selections = (
        FinalizedSelection.objects.filter(submission__college__unit=unit)
        .select_related("camp", "submission")
        .prefetch_related("cadets")
    )
    camp_id = request.GET.get("camp") or ""
    if camp_id.isdigit():
        selections = selections.filter(camp_id=camp_id)
    query = (request.GET.get("q") or "").strip()
    if query:
        selections = selections.filter(
            Q(camp_title__icontains=query)
            | Q(college_name__icontains=query)
            | Q(cadets__name__icontains=query)
        ).distinct()
    return selections, unit


@reviewer_required
def finalized_list(request):
    selections, unit = _finalized_queryset(request)
    cadets = FinalizedCadet.objects.filter(selection__in=selections)
    totals = {
        "selected": cadets.filter(status=FinalizedCadet.Status.SELECTED).count(),
        "reserve": cadets.filter(status=FinalizedCadet.Status.RESERVE).count(),
        "camps": selections.values("camp_id").distinct().count(),
    }
    return render(
        request,
        "camps/finalized_list.html",
        {
            "selections": selections,
            "totals": totals,
            "camps": CampNotification.objects.filter(unit=unit) if unit else [],
            "camp_id": request.GET.get("camp") or "",
            "q": (request.GET.get("q") or "").strip(),
        },
    )


@reviewer_required
def finalized_export(request):
    selections, _ = _finalized_queryset(request)
    camp_title = None
    camp_id = request.GET.get("camp") or ""
    if camp_id.isdigit():
        camp = CampNotification.objects.filter(pk=camp_id).first()
        camp_title = camp.title if camp else None
    return finalized_selections_csv(selections, camp_title=camp_title)


@reviewer_required
def finalized_selection_export(request, pk):
    """CSV of a single college's finalized selection."""
    unit = unit_for_reviewer(request.user)
    if unit is None:
        raise Http404("No unit assigned")
    selection = get_object_or_404(
        FinalizedSelection, pk=pk, submission__college__unit=unit
    )
    return finalized_selections_csv([selection], camp_title=selection.camp_title)

# ───────────────────────────────
#  Institute level
# ───────────────────────────────

@reviewer_required
def institute_create(request):
    unit = unit_for_reviewer(request.user)
    if unit is None:
        messages.warning(request, "You are not assigned to a unit yet. Contact the administrator.")
        return redirect("camps:institute_list")

    form = InstituteSelectionForm(request.POST or None, unit=unit)
    if request.method == "POST" and form.is_valid():
        try:
            selection = create_institute_selection(
                request.user,
                [c.pk for c in form.cleaned_data["cadets"]],
                unit=unit,
            )
        except SelectionError as exc:
            messages.error(request, str(exc))
        else:
            summary = notify_institute_selection(selection)
            messages.success(
                request,
                f"Successfully selected {selection.total_selected} cadets for institute level. "
                f"{summary.sent} notification(s) sent, {summary.failed} failed.",
            )
            return redirect("camps:institute_detail", pk=selection.pk)

    return render(request, "camps/institute_create.html", {"form": form})


@reviewer_required
def institute_list(request):
    unit = unit_for_reviewer(request.user)
    selections = (
        InstituteSelection.objects.filter(unit=unit).select_related("created_by")
        if unit
        else InstituteSelection.objects.none()
    )
    return render(request, "camps/institute_list.html", {"selections": selections})


def _unit_institute_selection(request, pk):
    unit = unit_for_reviewer(request.user)
    if unit is None:
        raise Http404("No unit assigned")
    return get_object_or_404(InstituteSelection, pk=pk, unit=unit)


@reviewer_required
def institute_detail(request, pk):
    selection = _unit_institute_selection(request, pk)
    return render(
        request,
        "camps/institute_detail.html",
        {"selection": selection, "cadets": selection.cadets.all()},
    )


@reviewer_required
def institute_export(request, pk):
    selection = _unit_institute_selection(request, pk)
    return institute_selection_csv(selection)
