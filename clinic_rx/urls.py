"""
URL configuration for clinic_rx project.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),

    # Procedure endpoint: /rpc/<procedure name>
    path("rpc/", include("apps.rpc.urls")),
]
