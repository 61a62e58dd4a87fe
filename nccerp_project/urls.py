from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),  # Built-in Django admin
    path("", include("core.urls")),  # core: dashboards, units, colleges, contacts
    path("accounts/", include("allauth.urls")),  # login/logout
    path("camps/", include(("camps.urls", "camps"), namespace="camps")),
    path("directory/", include(("directory.urls", "directory"), namespace="directory")),
    path(
        "usermanagement/",
        include(("usermanagement.urls", "usermanagement"), namespace="usermanagement"),
    ),
]


if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
