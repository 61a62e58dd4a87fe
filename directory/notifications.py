"""Outbound WhatsApp notifications for the camp workflow.

Every attempt is written to ``MessageDelivery``. Nothing here raises on a
failed delivery, so callers can notify after their own work is saved.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings as django_settings
from django.utils import timezone

from . import messages
from .models import MessageDelivery
from .sheets import (
    DirectoryError,
    contacts_for_colleges,
    fetch_ano_contacts,
    fetch_cadet_contacts,
    validate_sheets_config,
)
from .whatsapp import (
    DeliveryResult,
    MessagingError,
    send_whatsapp_message,
    validate_twilio_config,
)

logger = logging.getLogger(__name__)


@dataclass
class NotificationSummary:
    sent: int = 0
    failed: int = 0
    results: List[dict] = field(default_factory=list)
    error: str = ""

    @property
    def total(self) -> int:
        return self.sent + self.failed

    @property
    def success(self) -> bool:
        return self.sent > 0

    def add(self, recipient: str, result: DeliveryResult) -> None:
        if result.success:
            self.sent += 1
        else:
            self.failed += 1
        self.results.append(
            {
                "recipient": recipient,
                "success": result.success,
                "message_id": result.message_id,
                "error": result.error,
            }
        )


def deliver(number, body, *, audience, kind, recipient_name="", recipient_email="", camp=None, settings=django_settings) -> DeliveryResult:
    """Send one message and record the attempt."""
    try:
        result = send_whatsapp_message(number, body, settings=settings)
    except MessagingError as exc:
        logger.warning("WhatsApp not sent to %s: %s", recipient_name or number, exc)
        result = DeliveryResult(success=False, error=str(exc))

    MessageDelivery.objects.create(
        audience=audience,
        kind=kind,
        recipient_name=recipient_name,
        recipient_email=recipient_email,
        phone_number=number or "",
        camp=camp,
        success=result.success,
        provider_message_id=result.message_id,
        error=result.error,
    )
    return result


def send_camp_notification(camp, sender_name: Optional[str] = None, settings=django_settings) -> NotificationSummary:
    """Notify the ANOs (and cadets when requested) of colleges with a vacancy."""
    summary = NotificationSummary()

    missing = validate_twilio_config(settings=settings) + validate_sheets_config(settings=settings)
    if missing:
        summary.error = "WhatsApp notifications are not configured: " + ", ".join(missing)
        logger.warning("Camp %s: %s", camp.pk, summary.error)
        return summary

    college_names = list(camp.allotted_colleges().values_list("name", flat=True))
    if not college_names:
        summary.error = "No colleges have vacancies for this camp."
        return summary

    sender_name = sender_name or (
        camp.created_by.get_full_name() or camp.created_by.username
        if camp.created_by
        else "NCC ERP"
    )

    try:
        anos = contacts_for_colleges(fetch_ano_contacts(settings=settings), college_names)
    except DirectoryError as exc:
        summary.error = f"Could not read ANO contacts: {exc}"
        return summary

    for contact in anos:
        result = deliver(
            contact.whatsapp_number,
            messages.camp_notification_for_ano(contact, camp, sender_name),
            audience=MessageDelivery.Audience.ANO,
            kind=MessageDelivery.Kind.CAMP_NOTIFICATION,
            recipient_name=contact.name,
            recipient_email=contact.email,
            camp=camp,
            settings=settings,
        )
        summary.add(contact.name, result)

    if camp.send_to == camp.SendTo.CADETS:
        try:
            cadets = contacts_for_colleges(
                fetch_cadet_contacts(settings=settings), college_names
            )
        except DirectoryError as exc:
            summary.error = f"Could not read cadet contacts: {exc}"
            cadets = []
        for contact in cadets:
            result = deliver(
                contact.whatsapp_number,
                messages.camp_notification_for_cadet(contact, camp),
                audience=MessageDelivery.Audience.CADET,
                kind=MessageDelivery.Kind.CAMP_NOTIFICATION,
                recipient_name=contact.name,
                recipient_email=contact.email,
                camp=camp,
                settings=settings,
            )
            summary.add(contact.name, result)

    if not summary.total and not summary.error:
        summary.error = "No directory contacts matched the allotted colleges."

    logger.info(
        "Camp %s notifications: %s sent, %s failed", camp.pk, summary.sent, summary.failed
    )
    return summary


def notify_cadet_selection(cadet, decision, settings=django_settings) -> DeliveryResult:
    """Tell a cadet they were selected or placed in reserve."""
    submission = cadet.submission
    body = messages.selection_message(
        cadet, submission.camp.title, submission.college.name, decision
    )
    return deliver(
        cadet.whatsapp_number,
        body,
        audience=MessageDelivery.Audience.CADET,
        kind=MessageDelivery.Kind.SELECTION,
        recipient_name=cadet.name,
        recipient_email=cadet.email,
        camp=submission.camp,
        settings=settings,
    )


def notify_institute_selection(selection, settings=django_settings) -> NotificationSummary:
    summary = NotificationSummary()
    selection_day = timezone.localdate(selection.selection_date)
    for cadet in selection.cadets.select_related("camp"):
        result = deliver(
            cadet.whatsapp_number,
            messages.institute_selection_message(cadet, selection_day),
            audience=MessageDelivery.Audience.CADET,
            kind=MessageDelivery.Kind.INSTITUTE_SELECTION,
            recipient_name=cadet.name,
            recipient_email=cadet.email,
            camp=cadet.camp,
            settings=settings,
        )
        summary.add(cadet.name, result)
    return summary
