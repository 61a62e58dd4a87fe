import csv
import datetime
import io

from django.utils import timezone

from camps.exports import (
    FINALIZED_HEADERS,
    finalized_selections_csv,
    institute_selection_csv,
)
from camps.models import FinalizedCadet, InstituteSelectedCadet, InstituteSelection
from camps.selection import finalize_submission, record_decision

from .base import CampTestCase


def rows(response):
    return list(csv.reader(io.StringIO(response.content.decode())))


class ExportTests(CampTestCase):
    def setUp(self):
        super().setUp()
        submission = self.submit(count=2)
        first, second = submission.cadets.all()
        record_decision(submission.pk, first.pk, "selected", self.clerk)
        record_decision(submission.pk, second.pk, "reserve", self.clerk)
        _, self.finalized = finalize_submission(submission.pk, self.clerk)

    def test_finalized_csv_quotes_every_field(self):
        response = finalized_selections_csv([self.finalized])
        today = timezone.localdate().strftime("%Y-%m-%d")
        self.assertIn(f"Finalized_Selections_{today}.csv", response["Content-Disposition"])
        first_line = response.content.decode().splitlines()[0]
        self.assertEqual(first_line, ",".join(f'"{h}"' for h in FINALIZED_HEADERS))
        body = rows(response)[1:]
        self.assertEqual(len(body), 2)
        self.assertEqual(body[0][:2], ["Annual Training Camp", "Govt College"])
        self.assertEqual(body[0][7], today)

    def test_camp_title_made_filename_safe(self):
        response = finalized_selections_csv([], camp_title="RDC / 2030: Delhi")
        self.assertIn('filename="RDC_2030_Delhi_Finalized_Selections.csv"', response["Content-Disposition"])
        self.assertEqual(rows(response), [FINALIZED_HEADERS])

    def test_snapshot_survives_camp_rename(self):
        self.camp.title = "Renamed"
        self.camp.save()
        body = rows(finalized_selections_csv([self.finalized]))[1:]
        self.assertEqual({r[0] for r in body}, {"Annual Training Camp"})

    def test_institute_csv(self):
        picked = FinalizedCadet.objects.get(status="selected")
        selection = InstituteSelection.objects.create(
            unit=self.unit,
            created_by=self.co,
            total_selected=1,
            selection_date=timezone.make_aware(datetime.datetime(2030, 7, 1, 10, 0)),
        )
        InstituteSelectedCadet.objects.create(
            selection=selection,
            finalized_cadet=picked,
            camp=self.camp,
            camp_title="Annual Training Camp",
            college_name="Govt College",
            name=picked.name,
            rank=picked.rank,
            email=picked.email,
            whatsapp_number=picked.whatsapp_number,
        )
        response = institute_selection_csv(selection)
        self.assertIn("institute-selection-2030-07-01.csv", response["Content-Disposition"])
        self.assertEqual(
            rows(response)[1],
            ["CDT", "Cadet 1", "cadet1@example.com", "9876500001", "Govt College", "Annual Training Camp"],
        )
