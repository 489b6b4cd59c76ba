from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Admin
    path("admin/", admin.site.urls),

    # JSON API consumed by the dashboard
    path("api/", include("clients_core.urls")),
]
