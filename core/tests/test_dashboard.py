import datetime

from django.contrib.auth.models import User
from django.test import TestCase
from django.urls import reverse

from camps.models import CadetSubmission, CampNotification, CampVacancy, SubmittedCadet
from core.models import College, Profile, Unit


def make_user(username, role):
    user = User.objects.create_user(username, f"{username}@example.com", "pass")
    Profile.objects.filter(user=user).update(role=role)
    return user


class DashboardDispatchTests(TestCase):
    def setUp(self):
        self.co = make_user("co", Profile.Role.CO)
        self.clerk = make_user("clerk", Profile.Role.CLERK)
        self.ano = make_user("ano", Profile.Role.ANO)
        self.unit = Unit.objects.create(name="Unit", co=self.co, clerk=self.clerk)
        self.college = College.objects.create(name="College", unit=self.unit)
        self.college.anos.add(self.ano)
        self.camp = CampNotification.objects.create(
            title="CATC",
            reporting_date=datetime.date(2030, 1, 5),
            reporting_time=datetime.time(9, 0),
            venue="Ropar",
            unit=self.unit,
            created_by=self.clerk,
        )
        CampVacancy.objects.create(camp=self.camp, college=self.college, count=4)
        submission = CadetSubmission.objects.create(
            camp=self.camp, college=self.college, ano=self.ano
        )
        SubmittedCadet.objects.create(submission=submission, name="Cadet", email="c@x.com")

    def test_admin_dashboard(self):
        admin = User.objects.create_superuser("admin", "admin@example.com", "pass")
        self.client.force_login(admin)
        resp = self.client.get(reverse("dashboard"))
        self.assertTemplateUsed(resp, "core/admin_dashboard.html")
        self.assertEqual(resp.context["stats"]["active_camps"], 1)
        self.assertEqual(resp.context["stats"]["pending_reviews"], 1)
        self.assertEqual(resp.context["stats"]["total_users"], 3)

    def test_ano_dashboard(self):
        self.client.force_login(self.ano)
        resp = self.client.get(reverse("dashboard"))
        self.assertTemplateUsed(resp, "core/ano_dashboard.html")
        stats = resp.context["stats"]
        self.assertEqual(stats["assigned_camps"], 1)
        self.assertEqual(stats["total_vacancies"], 4)
        self.assertEqual(stats["submitted_cadets"], 1)
        self.assertEqual(stats["pending_documents"], 1)

    def test_reviewer_dashboard(self):
        for user in (self.clerk, self.co):
            self.client.force_login(user)
            resp = self.client.get(reverse("dashboard"))
            self.assertTemplateUsed(resp, "core/reviewer_dashboard.html")
            self.assertEqual(resp.context["unit"], self.unit)
            self.assertEqual(resp.context["stats"]["pending_review"], 1)
            self.assertEqual(resp.context["stats"]["total_cadets"], 1)

    def test_unassigned_reviewer_sees_empty_dashboard(self):
        self.client.force_login(make_user("loose", Profile.Role.CLERK))
        resp = self.client.get(reverse("dashboard"))
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.context["unit"])
        self.assertEqual(resp.context["stats"]["pending_review"], 0)

    def test_anonymous_redirected(self):
        resp = self.client.get(reverse("dashboard"))
        self.assertEqual(resp.status_code, 302)

    def test_user_without_role_forbidden(self):
        user = make_user("odd", Profile.Role.ANO)
        Profile.objects.filter(user=user).update(role="")
        self.client.force_login(user)
        resp = self.client.get(reverse("dashboard"))
        self.assertEqual(resp.status_code, 403)
