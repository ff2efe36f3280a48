"""
Procedure views for patients app.
"""
from apps.common.serializers import IdInputSerializer, SearchInputSerializer
from apps.rpc.registry import mutation, query
from .serializers import PatientSerializer, PatientUpdateInputSerializer
from .services import PatientService


@mutation("patients.create", input_serializer=PatientSerializer)
def create_patient(request, data):
    patient = PatientService.create_patient(**data)
    return PatientSerializer(patient).data


@query("patients.get_all")
def get_patients(request, data):
    return PatientSerializer(PatientService.get_patients(), many=True).data


@query("patients.get_by_id", input_serializer=IdInputSerializer)
def get_patient_by_id(request, data):
    patient = PatientService.get_patient(data["id"])
    return PatientSerializer(patient).data if patient else None


@mutation("patients.update", input_serializer=PatientUpdateInputSerializer)
def update_patient(request, data):
    fields = dict(data)
    patient_id = fields.pop("id")
    patient = PatientService.update_patient(patient_id, **fields)
    return PatientSerializer(patient).data


@query("patients.search", input_serializer=SearchInputSerializer)
def search_patients(request, data):
    return PatientSerializer(PatientService.search_patients(data["query"]), many=True).data
