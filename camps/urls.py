from django.urls import path

from . import views, views_review

app_name = "camps"

urlpatterns = [
    # clerk / CO
    path("notifications/", views.notification_list, name="notification_list"),
    path("notifications/new/", views.notification_create, name="notification_create"),
    path("notifications/<int:pk>/edit/", views.notification_edit, name="notification_edit"),
    path("notifications/<int:pk>/delete/", views.notification_delete, name="notification_delete"),
    path("review/", views_review.review_list, name="review_list"),
    path("review/<int:pk>/", views_review.review_detail, name="review_detail"),
    path(
        "review/<int:pk>/cadets/<int:cadet_id>/decision/",
        views_review.cadet_decision,
        name="cadet_decision",
    ),
    path("review/<int:pk>/reject/", views_review.reject, name="reject"),
    path("review/<int:pk>/finalize/", views_review.finalize, name="finalize"),
    path("finalized/", views_review.finalized_list, name="finalized_list"),
    path("finalized/export/", views_review.finalized_export, name="finalized_export"),
    path(
        "finalized/<int:pk>/export/",
        views_review.finalized_selection_export,
        name="finalized_selection_export",
    ),
    path("institute/", views_review.institute_list, name="institute_list"),
    path("institute/new/", views_review.institute_create, name="institute_create"),
    path("institute/<int:pk>/", views_review.institute_detail, name="institute_detail"),
    path("institute/<int:pk>/export/", views_review.institute_export, name="institute_export"),
    # ANO
    path("vacancies/", views.vacancies, name="vacancies"),
    path("submit/", views.submit_cadets, name="submit_cadets"),
    path("documents/", views.upload_documents, name="upload_documents"),
    path("status/", views.track_status, name="track_status"),
]
