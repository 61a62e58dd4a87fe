import shutil
import tempfile
from unittest.mock import patch

from django.contrib.auth.models import User
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from django.urls import reverse

from camps.models import (
    CampNotification,
    CampVacancy,
    FinalizedCadet,
    FinalizedSelection,
    SubmittedCadet,
)
from camps.selection import finalize_submission, record_decision
from core.models import ActivityLog, College, Profile
from directory.notifications import NotificationSummary

from .base import CampTestCase, make_user

MEDIA_ROOT = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class CampNotificationViewTests(CampTestCase):
    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        super().setUp()
        self.client.force_login(self.clerk)

    def form_data(self, **extra):
        data = {
            "title": "Thal Sainik Camp",
            "description": "Shooting and obstacle course",
            "reporting_date": "2030-09-10",
            "reporting_time": "07:00",
            "venue": "Delhi Cantt",
            "send_to": CampNotification.SendTo.ANO,
            "status": CampNotification.Status.PUBLISHED,
            f"vacancy_{self.college.pk}": "3",
            f"vacancy_{self.other_college.pk}": "0",
        }
        data.update(extra)
        return data

    @patch("camps.views.send_camp_notification")
    def test_create_saves_vacancies_and_notifies(self, mock_send):
        mock_send.return_value = NotificationSummary(sent=1)
        letter = SimpleUploadedFile("letter.pdf", b"%PDF-1.4", content_type="application/pdf")

        resp = self.client.post(
            reverse("camps:notification_create"), self.form_data(official_letter=letter)
        )

        self.assertRedirects(resp, reverse("camps:notification_list"))
        camp = CampNotification.objects.get(title="Thal Sainik Camp")
        self.assertEqual(camp.unit, self.unit)
        self.assertEqual(camp.created_by, self.clerk)
        self.assertTrue(camp.official_letter.name.endswith(".pdf"))
        self.assertEqual(camp.vacancy_for(self.college), 3)
        self.assertEqual(list(camp.allotted_colleges()), [self.college])
        mock_send.assert_called_once()
        self.assertEqual(mock_send.call_args.args[0], camp)
        self.assertTrue(ActivityLog.objects.filter(action="camp.create").exists())

    @override_settings(TWILIO_ACCOUNT_SID="", GOOGLE_SHEETS_API_KEY="")
    def test_create_without_messaging_config_warns(self):
        resp = self.client.post(
            reverse("camps:notification_create"), self.form_data(), follow=True
        )
        texts = [str(m) for m in resp.context["messages"]]
        self.assertTrue(any("not configured" in t for t in texts))
        self.assertTrue(CampNotification.objects.filter(title="Thal Sainik Camp").exists())

    def test_at_least_one_vacancy_required(self):
        resp = self.client.post(
            reverse("camps:notification_create"),
            self.form_data(**{f"vacancy_{self.college.pk}": "0"}),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.context["form"].non_field_errors())

    def test_letter_type_checked(self):
        bad = SimpleUploadedFile("letter.exe", b"MZ", content_type="application/octet-stream")
        resp = self.client.post(
            reverse("camps:notification_create"), self.form_data(official_letter=bad)
        )
        self.assertIn("official_letter", resp.context["form"].errors)

    def test_edit_updates_vacancies(self):
        resp = self.client.post(
            reverse("camps:notification_edit", args=[self.camp.pk]),
            self.form_data(
                title="Annual Training Camp II",
                **{f"vacancy_{self.other_college.pk}": "5"},
            ),
        )
        self.assertRedirects(resp, reverse("camps:notification_list"))
        self.camp.refresh_from_db()
        self.assertEqual(self.camp.title, "Annual Training Camp II")
        self.assertEqual(self.camp.vacancy_for(self.other_college), 5)
        self.assertEqual(self.camp.total_vacancies, 8)

    def test_edit_form_prefills_vacancies(self):
        resp = self.client.get(reverse("camps:notification_edit", args=[self.camp.pk]))
        initial = {f.label: f.initial for f in resp.context["form"].vacancy_fields()}
        self.assertEqual(initial, {"Arts College": 1, "Govt College": 2})

    def test_list_and_delete_scoped_to_unit(self):
        resp = self.client.get(reverse("camps:notification_list"))
        self.assertEqual([c.title for c in resp.context["camps"]], ["Annual Training Camp"])

        outsider = make_user("clerk9", Profile.Role.CLERK)
        self.client.force_login(outsider)
        resp = self.client.post(reverse("camps:notification_delete", args=[self.camp.pk]))
        self.assertEqual(resp.status_code, 404)

        self.client.force_login(self.co)
        resp = self.client.post(reverse("camps:notification_delete", args=[self.camp.pk]))
        self.assertRedirects(resp, reverse("camps:notification_list"))
        self.assertFalse(CampNotification.objects.filter(pk=self.camp.pk).exists())
        self.assertFalse(CampVacancy.objects.filter(camp_id=self.camp.pk).exists())


class FinalizedCampDeleteTests(CampTestCase):
    def setUp(self):
        super().setUp()
        submission = self.submit(count=2)
        first = submission.cadets.order_by("position").first()
        record_decision(submission.pk, first.pk, SubmittedCadet.Decision.SELECTED, self.co)
        finalize_submission(submission.pk, self.co)

    def test_camp_with_finalized_selection_is_kept(self):
        self.client.force_login(self.co)
        resp = self.client.post(reverse("camps:notification_delete", args=[self.camp.pk]))
        self.assertRedirects(resp, reverse("camps:notification_list"))
        self.assertTrue(CampNotification.objects.filter(pk=self.camp.pk).exists())
        self.assertEqual(FinalizedSelection.objects.count(), 1)
        self.assertEqual(FinalizedCadet.objects.count(), 1)
        errors = [str(m) for m in get_messages(resp.wsgi_request)]
        self.assertIn("cannot be deleted", errors[0])
        self.assertFalse(ActivityLog.objects.filter(action="camp.delete").exists())

    def test_college_with_finalized_selection_is_kept(self):
        admin = User.objects.create_superuser("admin", "admin@example.com", "pass")
        self.client.force_login(admin)
        resp = self.client.post(reverse("admin_college_delete", args=[self.college.pk]))
        self.assertRedirects(resp, reverse("admin_colleges"))
        self.assertTrue(College.objects.filter(pk=self.college.pk).exists())
        self.assertEqual(FinalizedSelection.objects.count(), 1)

    def test_camp_without_finalized_selection_still_deletes(self):
        other = self.make_camp("Trekking Camp", {self.college: 1})
        self.client.force_login(self.co)
        self.client.post(reverse("camps:notification_delete", args=[other.pk]))
        self.assertFalse(CampNotification.objects.filter(pk=other.pk).exists())
