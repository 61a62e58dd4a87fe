import logging

from django.contrib import messages
from django.core.paginator import Paginator
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import render

from core.decorators import admin_required

from .models import MessageDelivery
from .reconciliation import reconcile_colleges
from .sheets import DirectoryError, test_connection as check_sheets_connection
from .whatsapp import validate_twilio_config

logger = logging.getLogger(__name__)


@admin_required
def test_connection(request):
    """Run the spreadsheet connection check on demand."""
    result = None
    if request.method == "POST" or request.GET.get("run"):
        result = check_sheets_connection()
        if request.headers.get("Accept", "").startswith("application/json"):
            status = 200 if result["success"] else 502
            return JsonResponse(
                {
                    "ok": result["success"],
                    "message": result["message"],
                    "contacts": [c.as_dict() for c in result["contacts"]],
                },
                status=status,
            )
        level = messages.SUCCESS if result["success"] else messages.ERROR
        messages.add_message(request, level, result["message"])

    return render(
        request,
        "directory/test_connection.html",
        {"result": result, "twilio_missing": validate_twilio_config()},
    )


@admin_required
def reconcile(request):
    report = None
    error = ""
    if request.method == "POST" or request.GET.get("run"):
        try:
            report = reconcile_colleges()
        except DirectoryError as exc:
            error = str(exc)
            messages.error(request, f"Could not read the contact sheet: {exc}")
    return render(
        request, "directory/reconcile.html", {"report": report, "error": error}
    )


@admin_required
def deliveries(request):
    qs = MessageDelivery.objects.select_related("camp")
    query = (request.GET.get("q") or "").strip()
    if query:
        qs = qs.filter(
            Q(recipient_name__icontains=query)
            | Q(recipient_email__icontains=query)
            | Q(phone_number__icontains=query)
            | Q(camp__title__icontains=query)
        )
    outcome = request.GET.get("outcome") or ""
    if outcome == "sent":
        qs = qs.filter(success=True)
    elif outcome == "failed":
        qs = qs.filter(success=False)

    page = Paginator(qs, 50).get_page(request.GET.get("page"))
    return render(
        request,
        "directory/deliveries.html",
        {"page": page, "q": query, "outcome": outcome},
    )
