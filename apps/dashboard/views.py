"""
Procedure views for role dashboards.
"""
from rest_framework.exceptions import PermissionDenied

from apps.accounts.permissions import IsAdminRole, IsCashierOrAdmin, IsDoctorOrAdmin
from apps.rpc.registry import query
from .serializers import AsOfInputSerializer, DoctorDashboardInputSerializer
from .services import DashboardService


@query("dashboard.admin", input_serializer=AsOfInputSerializer, permission_classes=[IsAdminRole])
def admin_dashboard(request, data):
    return DashboardService.get_admin_dashboard(as_of=data.get("as_of"))


@query("dashboard.doctor", input_serializer=DoctorDashboardInputSerializer, permission_classes=[IsDoctorOrAdmin])
def doctor_dashboard(request, data):
    """Doctors see only their own dashboard; admins may open any doctor's."""
    if not request.user.is_admin() and request.user.id != data["doctor_id"]:
        raise PermissionDenied("Doctors can only view their own dashboard.")
    return DashboardService.get_doctor_dashboard(data["doctor_id"], as_of=data.get("as_of"))


@query("dashboard.cashier", input_serializer=AsOfInputSerializer, permission_classes=[IsCashierOrAdmin])
def cashier_dashboard(request, data):
    return DashboardService.get_cashier_dashboard(as_of=data.get("as_of"))
