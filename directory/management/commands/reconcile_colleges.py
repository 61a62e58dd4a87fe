from django.core.management.base import BaseCommand, CommandError

from directory.reconciliation import reconcile_colleges
from directory.sheets import DirectoryError


class Command(BaseCommand):
    """Report colleges whose names do not line up with the ANO contact sheet."""

    help = "Compare database colleges with the colleges listed in the ANO Google Sheet"

    def handle(self, *args, **options):
        try:
            report = reconcile_colleges()
        except DirectoryError as exc:
            raise CommandError(str(exc)) from exc

        for match in report.matched:
            self.stdout.write(f"OK       {match.college} <- {match.sheet_email}")
        for contact in report.unmatched_contacts:
            self.stdout.write(
                self.style.WARNING(f"SHEET    {contact.college!r} ({contact.email}) has no college")
            )
        for college in report.unmatched_colleges:
            self.stdout.write(
                self.style.WARNING(
                    f"DATABASE {college.college!r} ({college.ano_count} ANO) not in sheet"
                )
            )

        summary = (
            f"{len(report.matched)} matched, {len(report.unmatched_contacts)} unmatched "
            f"sheet contacts, {len(report.unmatched_colleges)} unmatched colleges"
        )
        if report.is_clean:
            self.stdout.write(self.style.SUCCESS(summary))
        else:
            self.stdout.write(self.style.WARNING(summary))
