"""
Procedure views for payments app.
"""
from apps.accounts.permissions import IsCashierOrAdmin
from apps.common.serializers import DateRangeInputSerializer, IdInputSerializer, PatientIdInputSerializer
from apps.rpc.registry import mutation, query
from .serializers import (
    DateInputSerializer,
    PaymentCreateInputSerializer,
    PaymentSerializer,
    PrescriptionIdInputSerializer,
)
from .services import PaymentService


@mutation("payments.create", input_serializer=PaymentCreateInputSerializer, permission_classes=[IsCashierOrAdmin])
def create_payment(request, data):
    payment = PaymentService.create_payment(created_by=request.user, **data)
    return PaymentSerializer(payment).data


@query("payments.get_all")
def get_payments(request, data):
    return PaymentSerializer(PaymentService.get_payments(), many=True).data


@query("payments.get_by_id", input_serializer=IdInputSerializer)
def get_payment_by_id(request, data):
    payment = PaymentService.get_payment(data["id"])
    return PaymentSerializer(payment).data if payment else None


@query("payments.get_by_patient_id", input_serializer=PatientIdInputSerializer)
def get_payments_by_patient_id(request, data):
    return PaymentSerializer(PaymentService.get_payments_by_patient(data["patient_id"]), many=True).data


@query("payments.get_by_prescription_id", input_serializer=PrescriptionIdInputSerializer)
def get_payments_by_prescription_id(request, data):
    payments = PaymentService.get_payments_by_prescription(data["prescription_id"])
    return PaymentSerializer(payments, many=True).data


@query("payments.get_by_date_range", input_serializer=DateRangeInputSerializer)
def get_payments_by_date_range(request, data):
    payments = PaymentService.get_payments_by_date_range(data["start_date"], data["end_date"])
    return PaymentSerializer(payments, many=True).data


@query("payments.get_daily_summary", input_serializer=DateInputSerializer)
def get_daily_summary(request, data):
    return PaymentService.get_daily_summary(data["date"])
