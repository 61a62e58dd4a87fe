# core/decorators.py

import logging
from functools import wraps

from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied
from django.http import HttpResponseForbidden

from .models import Profile, get_user_role

logger = logging.getLogger(__name__)


def role_required(*roles):
    """Allow the view only for users whose effective role is in ``roles``."""

    def decorator(view_func):
        @wraps(view_func)
        @login_required
        def _wrapped_view(request, *args, **kwargs):
            role = get_user_role(request.user)
            if role in roles:
                return view_func(request, *args, **kwargs)
            logger.warning(
                "Denied %s (role=%s) access to %s", request.user, role, request.path
            )
            return HttpResponseForbidden(
                "You do not have permission to access this page."
            )

        return _wrapped_view

    return decorator


def admin_required(view_func):
    """Decorator that requires user to be a superuser or have admin role."""

    @wraps(view_func)
    @login_required
    def _wrapped_view(request, *args, **kwargs):
        if get_user_role(request.user) != Profile.Role.ADMIN:
            raise PermissionDenied("Admin access required")
        return view_func(request, *args, **kwargs)

    return _wrapped_view


reviewer_required = role_required(Profile.Role.CLERK, Profile.Role.CO)
ano_required = role_required(Profile.Role.ANO)
