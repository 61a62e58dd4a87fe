from allauth.account.adapter import DefaultAccountAdapter
from django.urls import reverse


class RoleBasedAccountAdapter(DefaultAccountAdapter):
    """Send every user to the role dispatching dashboard after login.

    Accounts are provisioned by administrators, so public signup is closed.
    """

    def is_open_for_signup(self, request):
        return False

    def get_login_redirect_url(self, request):
        return reverse("dashboard")
