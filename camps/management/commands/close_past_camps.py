from django.core.management.base import BaseCommand
from django.utils import timezone

from camps.models import CampNotification


class Command(BaseCommand):
    """Close published camps whose reporting date has passed."""

    help = "Mark published camp notifications with a past reporting date as closed"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the camps that would be closed without changing them",
        )

    def handle(self, *args, **options):
        today = timezone.localdate()
        camps = CampNotification.objects.filter(
            status=CampNotification.Status.PUBLISHED, reporting_date__lt=today
        )
        for camp in camps:
            self.stdout.write(f"{camp.title} (reported {camp.reporting_date:%Y-%m-%d})")

        if options["dry_run"]:
            self.stdout.write(f"{camps.count()} camp(s) would be closed")
            return

        closed = camps.update(status=CampNotification.Status.CLOSED, updated_at=timezone.now())
        self.stdout.write(self.style.SUCCESS(f"Closed {closed} camp(s)"))
