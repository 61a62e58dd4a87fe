import datetime
from io import StringIO

import pytest
from django.contrib.auth.models import User
from django.core.management import call_command
from django.utils import timezone

from camps.models import CampNotification
from core.models import Profile, Unit


@pytest.fixture
def unit(db):
    co = User.objects.create_user("co", "co@example.com", "pass")
    clerk = User.objects.create_user("clerk", "clerk@example.com", "pass")
    Profile.objects.filter(user=co).update(role=Profile.Role.CO)
    Profile.objects.filter(user=clerk).update(role=Profile.Role.CLERK)
    return Unit.objects.create(name="Unit", co=co, clerk=clerk)


def make_camp(unit, title, days_from_today, status=CampNotification.Status.PUBLISHED):
    return CampNotification.objects.create(
        title=title,
        reporting_date=timezone.localdate() + datetime.timedelta(days=days_from_today),
        reporting_time=datetime.time(9, 0),
        venue="Ropar",
        unit=unit,
        status=status,
    )


@pytest.mark.django_db
def test_closes_only_past_published_camps(unit):
    past = make_camp(unit, "Past", -3)
    future = make_camp(unit, "Future", 5)
    draft = make_camp(unit, "Old Draft", -10, status=CampNotification.Status.DRAFT)

    out = StringIO()
    call_command("close_past_camps", stdout=out)

    past.refresh_from_db()
    future.refresh_from_db()
    draft.refresh_from_db()
    assert past.status == CampNotification.Status.CLOSED
    assert future.status == CampNotification.Status.PUBLISHED
    assert draft.status == CampNotification.Status.DRAFT
    assert "Closed 1 camp(s)" in out.getvalue()


@pytest.mark.django_db
def test_dry_run_changes_nothing(unit):
    past = make_camp(unit, "Past", -1)

    out = StringIO()
    call_command("close_past_camps", "--dry-run", stdout=out)

    past.refresh_from_db()
    assert past.status == CampNotification.Status.PUBLISHED
    assert "1 camp(s) would be closed" in out.getvalue()
