from .models import get_user_role
from .navigation import get_nav_items


def user_role(request):
    """Expose the effective role of the signed-in user to every template."""
    user = getattr(request, "user", None)
    return {"user_role": get_user_role(user) if user is not None else None}


def sidebar_menu(request):
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return {"sidebar_items": []}

    items = get_nav_items(get_user_role(user))
    for item in items:
        item["active"] = request.path == item["href"] or (
            item["href"] != "/" and request.path.startswith(item["href"])
        )
    return {"sidebar_items": items}
