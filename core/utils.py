import logging

from django.conf import settings
from django.contrib.sites.models import Site

from .models import College, Unit

logger = logging.getLogger(__name__)


def get_or_create_current_site(request):
    """Return the current Site, creating it from the request host if missing."""
    try:
        return Site.objects.get_current(request)
    except Site.DoesNotExist:
        host = request.get_host()
        site_id = getattr(settings, "SITE_ID", 1)
        site, created = Site.objects.get_or_create(
            id=site_id,
            defaults={"domain": host, "name": host},
        )
        if created:
            logger.info("Created missing Site %s with id %s", host, site_id)
        return site


def unit_for_reviewer(user):
    """Return the unit ``user`` reviews for, looking at CO first, then clerk."""
    if not getattr(user, "is_authenticated", False):
        return None
    unit = Unit.objects.filter(co=user).first()
    if unit is None:
        unit = Unit.objects.filter(clerk=user).first()
    return unit


def college_for_ano(user):
    if not getattr(user, "is_authenticated", False):
        return None
    return College.objects.filter(anos=user).select_related("unit").first()


def normalize_college_name(name):
    return (name or "").strip().lower()


def client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")
