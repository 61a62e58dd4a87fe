from django.urls import path

from . import views, views_admin

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("logout/", views.custom_logout, name="logout"),

    # Admin management
    path("manage/units/", views_admin.admin_units, name="admin_units"),
    path("manage/units/new/", views_admin.admin_unit_create, name="admin_unit_create"),
    path("manage/units/<int:pk>/edit/", views_admin.admin_unit_edit, name="admin_unit_edit"),
    path("manage/units/<int:pk>/delete/", views_admin.admin_unit_delete, name="admin_unit_delete"),
    path("manage/colleges/", views_admin.admin_colleges, name="admin_colleges"),
    path("manage/colleges/new/", views_admin.admin_college_create, name="admin_college_create"),
    path("manage/colleges/<int:pk>/edit/", views_admin.admin_college_edit, name="admin_college_edit"),
    path("manage/colleges/<int:pk>/delete/", views_admin.admin_college_delete, name="admin_college_delete"),
    path("manage/ano-contacts/", views_admin.admin_ano_contacts, name="admin_ano_contacts"),
    path("manage/ano-contacts/new/", views_admin.admin_ano_contact_create, name="admin_ano_contact_create"),
    path("manage/ano-contacts/<int:pk>/edit/", views_admin.admin_ano_contact_edit, name="admin_ano_contact_edit"),
    path("manage/ano-contacts/<int:pk>/delete/", views_admin.admin_ano_contact_delete, name="admin_ano_contact_delete"),
]
