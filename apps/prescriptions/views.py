"""
Procedure views for prescriptions app.
"""
from apps.accounts.permissions import IsAdminRole, IsCashierOrAdmin, IsDoctorOrAdmin
from apps.common.serializers import DoctorIdInputSerializer, IdInputSerializer, PatientIdInputSerializer
from apps.rpc.registry import mutation, query
from .serializers import (
    FillItemInputSerializer,
    PrescriptionCreateInputSerializer,
    PrescriptionDetailSerializer,
    PrescriptionItemSerializer,
    PrescriptionSerializer,
    StatusUpdateInputSerializer,
)
from .services import PrescriptionService


@mutation("prescriptions.create", input_serializer=PrescriptionCreateInputSerializer, permission_classes=[IsDoctorOrAdmin])
def create_prescription(request, data):
    prescription = PrescriptionService.create_prescription(
        patient_id=data["patient_id"],
        doctor_id=data["doctor_id"],
        notes=data.get("notes"),
        items=data["items"],
    )
    return PrescriptionSerializer(prescription).data


@query("prescriptions.get_all")
def get_prescriptions(request, data):
    return PrescriptionSerializer(PrescriptionService.get_prescriptions(), many=True).data


@query("prescriptions.get_by_id", input_serializer=IdInputSerializer)
def get_prescription_by_id(request, data):
    prescription = PrescriptionService.get_prescription(data["id"])
    return PrescriptionDetailSerializer(prescription).data if prescription else None


@query("prescriptions.get_by_patient_id", input_serializer=PatientIdInputSerializer)
def get_prescriptions_by_patient_id(request, data):
    prescriptions = PrescriptionService.get_prescriptions_by_patient(data["patient_id"])
    return PrescriptionSerializer(prescriptions, many=True).data


@query("prescriptions.get_by_doctor_id", input_serializer=DoctorIdInputSerializer)
def get_prescriptions_by_doctor_id(request, data):
    prescriptions = PrescriptionService.get_prescriptions_by_doctor(data["doctor_id"])
    return PrescriptionSerializer(prescriptions, many=True).data


@mutation("prescriptions.update_status", input_serializer=StatusUpdateInputSerializer, permission_classes=[IsAdminRole])
def update_prescription_status(request, data):
    prescription = PrescriptionService.update_status(data["id"], data["status"])
    return PrescriptionSerializer(prescription).data


@mutation("prescriptions.fill_item", input_serializer=FillItemInputSerializer, permission_classes=[IsCashierOrAdmin])
def fill_prescription_item(request, data):
    item = PrescriptionService.fill_item(data["item_id"], data["quantity_filled"])
    return PrescriptionItemSerializer(item).data


@query("prescriptions.get_pending")
def get_pending_prescriptions(request, data):
    return PrescriptionSerializer(PrescriptionService.get_pending_prescriptions(), many=True).data
