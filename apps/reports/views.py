"""
Procedure views for reports.
"""
from apps.accounts.permissions import IsAdminRole
from apps.common.serializers import ThresholdInputSerializer
from apps.rpc.registry import query
from .serializers import MedicineUsageInputSerializer, MonthlySummaryInputSerializer, SalesReportInputSerializer
from .services import ReportService


@query("reports.sales", input_serializer=SalesReportInputSerializer, permission_classes=[IsAdminRole])
def sales_report(request, data):
    return ReportService.get_sales_report(
        data["start_date"],
        data["end_date"],
        doctor_id=data.get("doctor_id"),
        medicine_category=data.get("medicine_category"),
    )


@query("reports.medicine_usage", input_serializer=MedicineUsageInputSerializer, permission_classes=[IsAdminRole])
def medicine_usage_report(request, data):
    return ReportService.get_medicine_usage_report(
        data["start_date"],
        data["end_date"],
        medicine_id=data.get("medicine_id"),
    )


@query("reports.low_stock_alerts", input_serializer=ThresholdInputSerializer, permission_classes=[IsAdminRole])
def low_stock_alerts(request, data):
    return ReportService.get_low_stock_alerts(data.get("threshold"))


@query("reports.monthly_summary", input_serializer=MonthlySummaryInputSerializer, permission_classes=[IsAdminRole])
def monthly_summary(request, data):
    return ReportService.get_monthly_summary(data["year"], data["month"])
