from django.urls import path

from . import views

app_name = "directory"

urlpatterns = [
    path("test-api/", views.test_connection, name="test_connection"),
    path("debug-emails/", views.reconcile, name="reconcile"),
    path("deliveries/", views.deliveries, name="deliveries"),
]
