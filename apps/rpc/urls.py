"""
URL configuration for the RPC router.
"""
from django.urls import path

from .views import ProcedureView

app_name = "rpc"

urlpatterns = [
    path("<str:name>", ProcedureView.as_view(), name="procedure"),
]
