import logging
from typing import Iterable, List, Optional

from django.conf import settings
from django.core.mail import EmailMessage, get_connection

from .models import College, Unit

logger = logging.getLogger(__name__)


def send_notification(subject: str, body: str, to: Iterable[str] | str, cc: Optional[Iterable[str]] = None) -> bool:
    """Send an email if EMAIL_NOTIFICATIONS_ENABLED is True.

    Returns True if queued successfully, False otherwise. Logs errors instead of raising.
    """
    if not getattr(settings, "EMAIL_NOTIFICATIONS_ENABLED", True):
        logger.info("Email notifications disabled; skipping: %s", subject)
        return False

    if isinstance(to, str):
        recipients: List[str] = [to]
    else:
        recipients = [r for r in to if r]
    if not recipients:
        logger.warning("send_notification called with no recipients: %s", subject)
        return False

    try:
        connection = get_connection()
        email = EmailMessage(
            subject=subject,
            body=body,
            from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
            to=recipients,
            cc=list(cc) if cc else None,
            connection=connection,
        )
        email.content_subtype = "html" if "</" in body else "plain"
        email.send(fail_silently=False)
        logger.info("Email sent: %s -> %s", subject, recipients)
        return True
    except Exception:
        logger.exception("Failed to send email: %s", subject)
        return False


def resolve_unit_reviewer_emails(unit: Optional[Unit]) -> List[str]:
    """Return the e-mail addresses of the CO and clerk of ``unit``."""
    if unit is None:
        return []
    emails = [getattr(unit.co, "email", ""), getattr(unit.clerk, "email", "")]
    return sorted({e for e in emails if e})


def resolve_college_ano_emails(college: Optional[College]) -> List[str]:
    if college is None:
        return []
    return sorted({u.email for u in college.anos.all() if u.email})
