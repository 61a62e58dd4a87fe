import datetime

from django.contrib.auth.models import User
from django.test import TestCase

from camps.models import CampNotification, CampVacancy
from camps.selection import create_submission
from core.models import College, Profile, Unit


def make_user(username, role, **extra):
    user = User.objects.create_user(username, f"{username}@example.com", "pass", **extra)
    Profile.objects.filter(user=user).update(role=role)
    return User.objects.get(pk=user.pk)


def cadet(n, college="Govt College"):
    return {
        "name": f"Cadet {n}",
        "rank": "CDT",
        "email": f"cadet{n}@example.com",
        "whatsapp_number": f"98765{n:05d}",
        "college": college,
    }


class CampTestCase(TestCase):
    """A unit with two colleges and a published camp with vacancies."""

    def setUp(self):
        self.co = make_user("co", Profile.Role.CO, first_name="Col", last_name="Rao")
        self.clerk = make_user("clerk", Profile.Role.CLERK)
        self.ano = make_user("ano", Profile.Role.ANO)
        self.other_ano = make_user("ano2", Profile.Role.ANO)
        self.unit = Unit.objects.create(name="1 PB BN", co=self.co, clerk=self.clerk)
        self.college = College.objects.create(name="Govt College", unit=self.unit)
        self.college.anos.add(self.ano)
        self.other_college = College.objects.create(name="Arts College", unit=self.unit)
        self.other_college.anos.add(self.other_ano)
        self.camp = self.make_camp("Annual Training Camp", {self.college: 2, self.other_college: 1})

    def make_camp(self, title, vacancies, **extra):
        values = {
            "description": "Ten day camp",
            "reporting_date": datetime.date(2030, 6, 1),
            "reporting_time": datetime.time(8, 30),
            "venue": "Ropar",
            "unit": self.unit,
            "created_by": self.clerk,
        }
        values.update(extra)
        camp = CampNotification.objects.create(title=title, **values)
        for college, count in vacancies.items():
            CampVacancy.objects.create(camp=camp, college=college, count=count)
        return camp

    def submit(self, count=3, college=None, ano=None, camp=None):
        return create_submission(
            camp or self.camp,
            college or self.college,
            ano or self.ano,
            [cadet(n) for n in range(1, count + 1)],
        )
