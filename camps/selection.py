"""Cadet selection pipeline.

submission -> review (per cadet decision) -> finalize -> institute level.

All state changes go through the functions here so that status transitions
and vacancy limits are checked in one place. Outbound notifications are the
caller's job and happen after the transaction commits.
"""

import logging
from collections import Counter

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.models import log_action

from .models import (
    CadetSubmission,
    CampNotification,
    CampVacancy,
    FinalizedCadet,
    FinalizedSelection,
    InstituteSelectedCadet,
    InstituteSelection,
    SubmittedCadet,
)

logger = logging.getLogger(__name__)


class SelectionError(Exception):
    """Raised when a pipeline step is not allowed for the current state."""


def transition(submission, new_status):
    """Move ``submission`` to ``new_status`` or raise ``SelectionError``."""
    if not submission.can_transition_to(new_status):
        raise SelectionError(
            f"Cannot move submission from {submission.get_status_display()} "
            f"to {CadetSubmission.Status(new_status).label}."
        )
    submission.status = new_status


def _display_name(user):
    if user is None:
        return ""
    return user.get_full_name() or user.username

# ───────────────────────────────
#  Submission
# ───────────────────────────────

def create_submission(camp, college, ano, cadets):
    """Create a pending submission of ``cadets`` for ``college``.

    ``cadets`` is an iterable of mappings with ``name``, ``rank``, ``email``
    and ``whatsapp_number``. Duplicate e-mails are collapsed.
    """
    if camp.status != CampNotification.Status.PUBLISHED:
        raise SelectionError("Cadets can only be submitted for published camps.")

    vacancy = camp.vacancy_for(college)
    if vacancy <= 0:
        raise SelectionError(f"{college.name} has no vacancy for {camp.title}.")

    unique = {}
    for entry in cadets:
        email = (entry.get("email") or "").strip().lower()
        if not email or email in unique:
            continue
        unique[email] = entry
    if not unique:
        raise SelectionError("Select at least one cadet.")

    try:
        with transaction.atomic():
            submission = CadetSubmission.objects.create(
                camp=camp, college=college, ano=ano
            )
            SubmittedCadet.objects.bulk_create(
                [
                    SubmittedCadet(
                        submission=submission,
                        name=(entry.get("name") or "").strip(),
                        rank=(entry.get("rank") or "").strip(),
                        email=email,
                        whatsapp_number=(entry.get("whatsapp_number") or "").strip(),
                        position=position,
                    )
                    for position, (email, entry) in enumerate(unique.items())
                ]
            )
    except IntegrityError as exc:
        raise SelectionError(
            f"{college.name} already has a submission for {camp.title}."
        ) from exc

    log_action(
        ano,
        "submission.create",
        f"Submitted {len(unique)} cadets for {camp.title}",
        submission_id=submission.pk,
        camp_id=camp.pk,
    )
    logger.info(
        "Submission %s created for camp %s by college %s (%s cadets)",
        submission.pk,
        camp.pk,
        college.pk,
        len(unique),
    )
    return submission

# ───────────────────────────────
#  Review
# ───────────────────────────────

def record_decision(submission_id, cadet_id, decision, reviewer):
    """Record ``decision`` for one cadet.

    Returns ``(cadet, notify)`` where ``notify`` is True when the decision
    changed to selected or reserve.
    """
    if decision not in SubmittedCadet.Decision.values:
        raise SelectionError(f"Unknown decision: {decision!r}.")

    with transaction.atomic():
        submission = CadetSubmission.objects.select_for_update().get(pk=submission_id)
        if submission.status not in (
            CadetSubmission.Status.PENDING,
            CadetSubmission.Status.UNDER_REVIEW,
        ):
            raise SelectionError(
                f"Decisions are locked once a submission is {submission.get_status_display().lower()}."
            )
        try:
            cadet = submission.cadets.select_for_update().get(pk=cadet_id)
        except SubmittedCadet.DoesNotExist as exc:
            raise SelectionError("Cadet does not belong to this submission.") from exc

        previous = cadet.decision
        now = timezone.now()
        cadet.decision = decision
        cadet.decided_by = reviewer
        cadet.decided_at = now
        cadet.save(update_fields=["decision", "decided_by", "decided_at"])

        if submission.status == CadetSubmission.Status.PENDING:
            transition(submission, CadetSubmission.Status.UNDER_REVIEW)
        submission.reviewed_by = reviewer
        submission.reviewed_at = now
        submission.save(update_fields=["status", "reviewed_by", "reviewed_at", "updated_at"])

    notify = previous != decision and decision in (
        SubmittedCadet.Decision.SELECTED,
        SubmittedCadet.Decision.RESERVE,
    )
    logger.info(
        "Cadet %s in submission %s marked %s by %s",
        cadet.pk,
        submission.pk,
        decision,
        reviewer,
    )
    return cadet, notify


def reject_submission(submission_id, reviewer, feedback):
    feedback = (feedback or "").strip()
    if not feedback:
        raise SelectionError("Feedback is required to reject a submission.")

    with transaction.atomic():
        submission = CadetSubmission.objects.select_for_update().get(pk=submission_id)
        transition(submission, CadetSubmission.Status.REJECTED)
        submission.feedback = feedback
        submission.reviewed_by = reviewer
        submission.reviewed_at = timezone.now()
        submission.save(
            update_fields=["status", "feedback", "reviewed_by", "reviewed_at", "updated_at"]
        )

    log_action(
        reviewer,
        "submission.reject",
        f"Rejected submission of {submission.college.name} for {submission.camp.title}",
        submission_id=submission.pk,
    )
    return submission


def finalize_submission(submission_id, reviewer):
    """Lock the decisions of a submission and snapshot its results.

    Returns ``(submission, finalized_selection)``; the selection is ``None``
    when nobody was selected or kept in reserve.
    """
    with transaction.atomic():
        submission = (
            CadetSubmission.objects.select_for_update()
            .select_related("camp", "college")
            .get(pk=submission_id)
        )
        transition(submission, CadetSubmission.Status.FINALIZED)

        cadets = list(submission.cadets.all())
        if not any(c.decision for c in cadets):
            raise SelectionError("No cadets have been reviewed yet; nothing to finalize.")

        selected = [c for c in cadets if c.decision == SubmittedCadet.Decision.SELECTED]
        reserve = [c for c in cadets if c.decision == SubmittedCadet.Decision.RESERVE]

        vacancy = (
            CampVacancy.objects.filter(camp=submission.camp, college=submission.college)
            .values_list("count", flat=True)
            .first()
            or 0
        )
        if len(selected) > vacancy:
            raise SelectionError(
                f"{len(selected)} cadets selected but {submission.college.name} "
                f"only has {vacancy} vacancies for {submission.camp.title}."
            )

        now = timezone.now()
        submission.finalized_by = reviewer
        submission.finalized_at = now
        submission.save(update_fields=["status", "finalized_by", "finalized_at", "updated_at"])

        finalized = None
        if selected or reserve:
            finalized = FinalizedSelection.objects.create(
                submission=submission,
                camp=submission.camp,
                camp_title=submission.camp.title,
                college_name=submission.college.name,
                finalized_by=reviewer,
                reviewer_name=_display_name(reviewer),
                finalized_at=now,
            )
            FinalizedCadet.objects.bulk_create(
                [
                    FinalizedCadet(
                        selection=finalized,
                        cadet=c,
                        name=c.name,
                        rank=c.rank,
                        email=c.email,
                        whatsapp_number=c.whatsapp_number,
                        status=c.decision,
                    )
                    for c in selected + reserve
                ]
            )

    log_action(
        reviewer,
        "submission.finalize",
        f"Finalized {submission.college.name} for {submission.camp.title}: "
        f"{len(selected)} selected, {len(reserve)} reserve",
        submission_id=submission.pk,
    )
    logger.info(
        "Submission %s finalized by %s (%s selected, %s reserve)",
        submission.pk,
        reviewer,
        len(selected),
        len(reserve),
    )
    return submission, finalized

# ───────────────────────────────
#  Institute Level
# ───────────────────────────────

def institute_candidates(unit):
    """Selected cadets of finalized (not yet forwarded) submissions in ``unit``."""
    qs = FinalizedCadet.objects.filter(
        status=FinalizedCadet.Status.SELECTED,
        selection__submission__status=CadetSubmission.Status.FINALIZED,
    ).select_related("selection", "selection__submission")
    if unit is not None:
        qs = qs.filter(selection__submission__college__unit=unit)
    return qs.order_by("selection__camp_title", "selection__college_name", "name")


def create_institute_selection(reviewer, finalized_cadet_ids, unit=None):
    """Promote the chosen cadets to institute level.

    Every contributing submission moves to forwarded.
    """
    ids = {int(pk) for pk in finalized_cadet_ids}
    if not ids:
        raise SelectionError("Select at least one cadet for institute level.")

    with transaction.atomic():
        chosen = list(institute_candidates(unit).filter(pk__in=ids))
        if len(chosen) != len(ids):
            raise SelectionError(
                "Some cadets are no longer available for institute level selection."
            )

        submission_ids = {c.selection.submission_id for c in chosen}
        submissions = list(
            CadetSubmission.objects.select_for_update().filter(pk__in=submission_ids)
        )
        for submission in submissions:
            transition(submission, CadetSubmission.Status.FORWARDED)

        camp_breakdown = Counter(c.selection.camp_title for c in chosen)
        college_breakdown = Counter(c.selection.college_name for c in chosen)
        selection = InstituteSelection.objects.create(
            unit=unit,
            created_by=reviewer,
            total_selected=len(chosen),
            camp_breakdown=dict(camp_breakdown),
            college_breakdown=dict(college_breakdown),
        )
        InstituteSelectedCadet.objects.bulk_create(
            [
                InstituteSelectedCadet(
                    selection=selection,
                    finalized_cadet=c,
                    camp_id=c.selection.camp_id,
                    submission_id=c.selection.submission_id,
                    camp_title=c.selection.camp_title,
                    college_name=c.selection.college_name,
                    name=c.name,
                    rank=c.rank,
                    email=c.email,
                    whatsapp_number=c.whatsapp_number,
                )
                for c in chosen
            ]
        )
        for submission in submissions:
            submission.save(update_fields=["status", "updated_at"])

    log_action(
        reviewer,
        "institute.select",
        f"Selected {len(chosen)} cadets for institute level",
        institute_selection_id=selection.pk,
    )
    logger.info(
        "Institute selection %s created by %s with %s cadets",
        selection.pk,
        reviewer,
        len(chosen),
    )
    return selection
