from django.contrib.auth.models import AnonymousUser, User
from django.test import RequestFactory, TestCase
from django.urls import reverse

from core.context_processors import sidebar_menu, user_role
from core.models import Profile, get_user_role
from core.navigation import get_nav_items


def make_user(username, role, **extra):
    user = User.objects.create_user(username, f"{username}@example.com", "pass", **extra)
    Profile.objects.filter(user=user).update(role=role)
    user.refresh_from_db()
    return user


class ProfileSignalTests(TestCase):
    def test_new_user_gets_ano_profile(self):
        user = User.objects.create_user("new", "new@example.com", "pass")
        self.assertEqual(user.profile.role, Profile.Role.ANO)

    def test_superuser_gets_admin_profile(self):
        user = User.objects.create_superuser("root", "root@example.com", "pass")
        self.assertEqual(user.profile.role, Profile.Role.ADMIN)

    def test_login_is_logged_with_role(self):
        make_user("clerk", Profile.Role.CLERK)
        self.client.login(username="clerk", password="pass")
        self.assertNotIn("role", self.client.session)
        entry = User.objects.get(username="clerk").activity_logs.get(action="login")
        self.assertIn("signed in as clerk", entry.description)

    def test_role_change_applies_without_new_login(self):
        user = make_user("clerk", Profile.Role.CLERK)
        self.client.login(username="clerk", password="pass")
        Profile.objects.filter(user=user).update(role=Profile.Role.ANO)
        resp = self.client.get(reverse("dashboard"))
        self.assertTemplateUsed(resp, "core/ano_dashboard.html")


class EffectiveRoleTests(TestCase):
    def test_anonymous_has_no_role(self):
        self.assertIsNone(get_user_role(AnonymousUser()))

    def test_superuser_is_admin_regardless_of_profile(self):
        user = User.objects.create_superuser("boss", "boss@example.com", "pass")
        Profile.objects.filter(user=user).update(role=Profile.Role.ANO)
        user.refresh_from_db()
        self.assertEqual(get_user_role(user), Profile.Role.ADMIN)

    def test_profile_role_used_for_regular_users(self):
        user = make_user("co", Profile.Role.CO)
        self.assertEqual(get_user_role(user), Profile.Role.CO)
        self.assertTrue(user.profile.is_reviewer)


class RoleGuardTests(TestCase):
    def setUp(self):
        self.ano = make_user("ano", Profile.Role.ANO)
        self.clerk = make_user("clerk", Profile.Role.CLERK)
        self.admin = make_user("admin", Profile.Role.ADMIN)

    def test_anonymous_redirected_to_login(self):
        resp = self.client.get(reverse("camps:review_list"))
        self.assertEqual(resp.status_code, 302)
        self.assertIn("/accounts/login/", resp["Location"])

    def test_ano_cannot_open_reviewer_pages(self):
        self.client.force_login(self.ano)
        resp = self.client.get(reverse("camps:review_list"))
        self.assertEqual(resp.status_code, 403)

    def test_reviewer_cannot_open_ano_pages(self):
        self.client.force_login(self.clerk)
        resp = self.client.get(reverse("camps:vacancies"))
        self.assertEqual(resp.status_code, 403)

    def test_admin_pages_reject_non_admins(self):
        self.client.force_login(self.clerk)
        resp = self.client.get(reverse("admin_units"))
        self.assertEqual(resp.status_code, 403)

    def test_admin_pages_allow_admin(self):
        self.client.force_login(self.admin)
        resp = self.client.get(reverse("admin_units"))
        self.assertEqual(resp.status_code, 200)


class NavigationTests(TestCase):
    def test_menus_follow_role(self):
        ano_ids = [i["id"] for i in get_nav_items(Profile.Role.ANO)]
        self.assertEqual(ano_ids, ["dashboard", "vacancies", "submit", "documents", "status"])
        clerk_ids = [i["id"] for i in get_nav_items(Profile.Role.CLERK)]
        self.assertEqual(clerk_ids, [i["id"] for i in get_nav_items(Profile.Role.CO)])
        self.assertIn("review", clerk_ids)
        self.assertIn("users", [i["id"] for i in get_nav_items(Profile.Role.ADMIN)])

    def test_unknown_role_has_no_menu(self):
        self.assertEqual(get_nav_items(None), [])
        self.assertEqual(get_nav_items("cadet"), [])

    def test_context_processors_mark_active_item(self):
        user = make_user("clerk", Profile.Role.CLERK)
        request = RequestFactory().get(reverse("camps:review_list"))
        request.user = user
        items = sidebar_menu(request)["sidebar_items"]
        active = [i["id"] for i in items if i["active"]]
        self.assertEqual(active, ["review"])
        self.assertEqual(user_role(request), {"user_role": Profile.Role.CLERK})

    def test_anonymous_sidebar_is_empty(self):
        request = RequestFactory().get("/")
        request.user = AnonymousUser()
        self.assertEqual(sidebar_menu(request), {"sidebar_items": []})
