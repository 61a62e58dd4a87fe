import logging

from django.conf import settings

from core.models import ActivityLog
from .utils import client_ip, get_or_create_current_site


logger = logging.getLogger(__name__)

# Admin endpoints that fire internal requests (translation catalogues and the
# like) would drown the audit trail.
ADMIN_NOISE_VIEWS = {
    "admin:jsi18n",
}

# Friendly phrases for views whose names read badly in the activity log.
VIEW_ACTIONS = {
    "dashboard": "opened the dashboard",
    "camps:finalized_export": "exported finalized selections",
    "camps:institute_export": "exported an institute selection",
    "directory:test_connection": "tested the contact directory connection",
}

VERB_MAP = {
    "GET": "viewed",
    "POST": "submitted",
    "PUT": "updated",
    "PATCH": "updated",
    "DELETE": "deleted",
}


class ActivityLogMiddleware:
    """Persist a log entry for each authenticated request.

    Static and media requests are skipped; everything else a signed-in user
    does leaves a row in ``ActivityLog``.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        try:
            if (
                request.user.is_authenticated
                and not request.path.startswith(settings.STATIC_URL)
                and not request.path.startswith(settings.MEDIA_URL)
            ):
                self._record(request, response)
        except Exception:  # pragma: no cover - logging should never break the request
            logger.exception(
                "Failed to log activity for %s %s", request.method, request.path
            )

        return response

    def _record(self, request, response):
        params = request.GET if request.method == "GET" else request.POST
        params = {
            k: v
            for k, v in params.items()
            if k.lower() not in {"csrfmiddlewaretoken", "password", "password1", "password2"}
        }

        resolver_match = getattr(request, "resolver_match", None)
        view_name = getattr(resolver_match, "view_name", "") or ""

        if view_name in ADMIN_NOISE_VIEWS:
            return

        custom_action = VIEW_ACTIONS.get(view_name)
        obj_title = None
        if custom_action:
            description = custom_action
        else:
            if view_name:
                view_desc = view_name.split(":")[-1].replace("_", " ")
            else:
                path_seg = request.path.strip("/").split("/")[-1]
                view_desc = path_seg.replace("-", " ") or "page"

            obj = getattr(request, "object", None)
            if obj is not None:
                obj_title = getattr(obj, "title", getattr(obj, "name", None))

            verb = VERB_MAP.get(request.method, request.method.lower())
            description = f"{verb} {view_desc}".strip()
            if obj_title:
                description += f' "{obj_title}"'

        user_display = request.user.get_full_name() or request.user.username
        description = f"{user_display} {description}".strip()

        metadata = params or None
        if obj_title:
            metadata = metadata or {}
            metadata["object_title"] = obj_title

        ActivityLog.objects.create(
            user=request.user,
            action=f"{request.method} {request.path}",
            description=description,
            ip_address=client_ip(request),
            metadata=metadata,
        )


class EnsureSiteMiddleware:
    """Guarantee a Site object exists for the current request domain."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        try:
            get_or_create_current_site(request)
        except Exception:
            logger.exception("Failed to ensure Site exists")
        return self.get_response(request)
