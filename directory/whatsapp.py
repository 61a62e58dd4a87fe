import logging
import re
from dataclasses import dataclass
from typing import List

import requests
from django.conf import settings as django_settings

logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"

_SEPARATORS = re.compile(r"[\s\-()]")


class MessagingError(Exception):
    """Raised when Twilio is not configured."""
    pass


@dataclass
class DeliveryResult:
    success: bool
    message_id: str = ""
    error: str = ""


def format_phone_number(raw: str, settings=django_settings) -> str:
    """Normalise ``raw`` to E.164 for WhatsApp.

    Separators are stripped. Numbers without ``+`` get one when they already
    start with the country code digits, otherwise the country code is prefixed.
    """
    number = _SEPARATORS.sub("", raw or "")
    if not number or number.startswith("+"):
        return number
    country_code = getattr(settings, "WHATSAPP_COUNTRY_CODE", "+91") or "+91"
    digits = country_code.lstrip("+")
    if number.startswith(digits):
        return f"+{number}"
    return f"{country_code}{number}"


def validate_twilio_config(settings=django_settings) -> List[str]:
    missing = []
    for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_WHATSAPP_NUMBER"):
        if not getattr(settings, name, ""):
            missing.append(name)
    return missing


def send_whatsapp_message(to: str, body: str, settings=django_settings) -> DeliveryResult:
    """Send ``body`` to ``to`` through the Twilio Messages API.

    Delivery failures are returned, not raised; only missing configuration
    raises ``MessagingError``.
    """
    missing = validate_twilio_config(settings=settings)
    if missing:
        raise MessagingError("Twilio not configured: " + ", ".join(missing))

    number = format_phone_number(to, settings=settings)
    if not number:
        return DeliveryResult(success=False, error="No WhatsApp number")

    sid = settings.TWILIO_ACCOUNT_SID
    sender = format_phone_number(settings.TWILIO_WHATSAPP_NUMBER, settings=settings)
    timeout = getattr(settings, "DIRECTORY_HTTP_TIMEOUT", 15)
    try:
        resp = requests.post(
            TWILIO_MESSAGES_URL.format(sid=sid),
            data={
                "From": f"whatsapp:{sender}",
                "To": f"whatsapp:{number}",
                "Body": body,
            },
            auth=(sid, settings.TWILIO_AUTH_TOKEN),
            timeout=timeout,
        )
        resp.raise_for_status()
        data = resp.json()
    except requests.HTTPError as exc:
        detail = _twilio_error_message(exc.response)
        logger.error("Twilio rejected message to %s: %s", number, detail)
        return DeliveryResult(success=False, error=detail)
    except requests.RequestException as exc:
        logger.error("Twilio request failed for %s: %s", number, exc)
        return DeliveryResult(success=False, error=str(exc))
    except ValueError as exc:
        logger.error("Invalid Twilio response: %s", exc)
        return DeliveryResult(success=False, error=f"Invalid Twilio response: {exc}")

    message_id = data.get("sid", "")
    logger.info("WhatsApp message %s queued for %s", message_id, number)
    return DeliveryResult(success=True, message_id=message_id)


def _twilio_error_message(response) -> str:
    if response is None:
        return "Twilio request failed"
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    return payload.get("message") or f"HTTP {response.status_code}"
