"""Admin management pages for units, colleges and ANO contacts."""

import logging

from django.contrib import messages
from django.db.models import Count, ProtectedError, Q
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from .decorators import admin_required
from .forms import AnoContactForm, CollegeForm, UnitForm
from .models import AnoContact, College, Unit, log_action

logger = logging.getLogger(__name__)


def _edit(request, form_class, instance, template, success_url, label):
    form = form_class(request.POST or None, instance=instance)
    if request.method == "POST" and form.is_valid():
        obj = form.save()
        verb = "updated" if instance is not None else "created"
        log_action(
            request.user,
            f"{label.lower().replace(' ', '_')}.{verb}",
            f"{label} {obj} {verb}",
            object_id=obj.pk,
        )
        messages.success(request, f"{label} '{obj}' {verb}.")
        return redirect(success_url)
    return render(
        request,
        template,
        {"form": form, "object": instance, "is_edit": instance is not None},
    )


def _delete(request, obj, success_url, label):
    name = str(obj)
    try:
        obj.delete()
    except ProtectedError:
        messages.error(request, f"{label} '{name}' is still in use and cannot be deleted.")
        return redirect(success_url)
    log_action(request.user, f"{label.lower().replace(' ', '_')}.deleted", f"{label} {name} deleted")
    messages.success(request, f"{label} '{name}' deleted.")
    return redirect(success_url)

# ───────────────────────────────
#  Units
# ───────────────────────────────

@admin_required
def admin_units(request):
    query = (request.GET.get("q") or "").strip()
    units = Unit.objects.select_related("co", "clerk").prefetch_related("colleges")
    if query:
        units = units.filter(
            Q(name__icontains=query) | Q(colleges__name__icontains=query)
        ).distinct()
    return render(request, "core/admin_units.html", {"units": units, "q": query})


@admin_required
def admin_unit_create(request):
    return _edit(request, UnitForm, None, "core/admin_unit_form.html", "admin_units", "Unit")


@admin_required
def admin_unit_edit(request, pk):
    unit = get_object_or_404(Unit, pk=pk)
    request.object = unit
    return _edit(request, UnitForm, unit, "core/admin_unit_form.html", "admin_units", "Unit")


@admin_required
@require_POST
def admin_unit_delete(request, pk):
    return _delete(request, get_object_or_404(Unit, pk=pk), "admin_units", "Unit")

# ───────────────────────────────
#  Colleges
# ───────────────────────────────

@admin_required
def admin_colleges(request):
    query = (request.GET.get("q") or "").strip()
    colleges = (
        College.objects.select_related("unit")
        .prefetch_related("anos")
        .annotate(ano_count=Count("anos", distinct=True))
    )
    if query:
        colleges = colleges.filter(
            Q(name__icontains=query) | Q(unit__name__icontains=query)
        )
    return render(
        request, "core/admin_colleges.html", {"colleges": colleges, "q": query}
    )


@admin_required
def admin_college_create(request):
    return _edit(
        request, CollegeForm, None, "core/admin_college_form.html", "admin_colleges", "College"
    )


@admin_required
def admin_college_edit(request, pk):
    college = get_object_or_404(College, pk=pk)
    request.object = college
    return _edit(
        request, CollegeForm, college, "core/admin_college_form.html", "admin_colleges", "College"
    )


@admin_required
@require_POST
def admin_college_delete(request, pk):
    return _delete(request, get_object_or_404(College, pk=pk), "admin_colleges", "College")

# ───────────────────────────────
#  ANO contacts
# ───────────────────────────────

@admin_required
def admin_ano_contacts(request):
    query = (request.GET.get("q") or "").strip()
    contacts = AnoContact.objects.all()
    if query:
        contacts = contacts.filter(
            Q(name__icontains=query)
            | Q(email__icontains=query)
            | Q(rank__icontains=query)
            | Q(whatsapp_number__icontains=query)
        )
    return render(
        request, "core/admin_ano_contacts.html", {"contacts": contacts, "q": query}
    )


@admin_required
def admin_ano_contact_create(request):
    return _edit(
        request,
        AnoContactForm,
        None,
        "core/admin_ano_contact_form.html",
        "admin_ano_contacts",
        "ANO contact",
    )


@admin_required
def admin_ano_contact_edit(request, pk):
    contact = get_object_or_404(AnoContact, pk=pk)
    return _edit(
        request,
        AnoContactForm,
        contact,
        "core/admin_ano_contact_form.html",
        "admin_ano_contacts",
        "ANO contact",
    )


@admin_required
@require_POST
def admin_ano_contact_delete(request, pk):
    return _delete(
        request, get_object_or_404(AnoContact, pk=pk), "admin_ano_contacts", "ANO contact"
    )
