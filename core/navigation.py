"""Role specific sidebar menus.

Each entry carries an ``id`` (stable key for highlighting), a ``label`` and the
URL name it links to.
"""

from django.urls import NoReverseMatch, reverse

from .models import Profile

NAV_ITEMS = {
    Profile.Role.ADMIN: [
        {"id": "dashboard", "label": "Dashboard", "url": "dashboard"},
        {"id": "users", "label": "Users", "url": "usermanagement:user_list"},
        {"id": "units", "label": "Units", "url": "admin_units"},
        {"id": "colleges", "label": "Colleges", "url": "admin_colleges"},
        {"id": "ano_contacts", "label": "ANO Contacts", "url": "admin_ano_contacts"},
        {"id": "test_api", "label": "Test Directory API", "url": "directory:test_connection"},
        {"id": "debug_emails", "label": "Debug Email Matching", "url": "directory:reconcile"},
        {"id": "deliveries", "label": "Message Deliveries", "url": "directory:deliveries"},
    ],
    Profile.Role.ANO: [
        {"id": "dashboard", "label": "Dashboard", "url": "dashboard"},
        {"id": "vacancies", "label": "Camp Vacancies", "url": "camps:vacancies"},
        {"id": "submit", "label": "Submit Cadets", "url": "camps:submit_cadets"},
        {"id": "documents", "label": "Upload Documents", "url": "camps:upload_documents"},
        {"id": "status", "label": "Track Status", "url": "camps:track_status"},
    ],
    Profile.Role.CLERK: [
        {"id": "dashboard", "label": "Dashboard", "url": "dashboard"},
        {"id": "notifications", "label": "Camp Notifications", "url": "camps:notification_list"},
        {"id": "review", "label": "Review Cadets", "url": "camps:review_list"},
        {"id": "finalize", "label": "Finalized Selections", "url": "camps:finalized_list"},
        {"id": "reports", "label": "Institute Selections", "url": "camps:institute_list"},
    ],
}
NAV_ITEMS[Profile.Role.CO] = NAV_ITEMS[Profile.Role.CLERK]


def get_nav_items(role):
    """Return the menu for ``role`` with URLs resolved; unknown roles get none."""
    items = []
    for item in NAV_ITEMS.get(role, []):
        try:
            href = reverse(item["url"])
        except NoReverseMatch:
            continue
        items.append({**item, "href": href})
    return items
