import logging

from django.db.models import Q

from apps.common.exceptions import NotFound
from .models import Patient

logger = logging.getLogger(__name__)


class PatientService:
    @staticmethod
    def create_patient(**fields):
        patient = Patient.objects.create(**fields)
        logger.info("Created patient %s", patient.id)
        return patient

    @staticmethod
    def get_patients():
        return Patient.objects.all()

    @staticmethod
    def get_patient(patient_id):
        return Patient.objects.filter(id=patient_id).first()

    @staticmethod
    def update_patient(patient_id, **fields):
        """
        Apply a partial update; only the given fields are written.
        """
        patient = Patient.objects.filter(id=patient_id).first()
        if patient is None:
            raise NotFound("patient", patient_id)

        for name, value in fields.items():
            setattr(patient, name, value)
        patient.save(update_fields=[*fields, "updated_at"])
        return patient

    @staticmethod
    def search_patients(query):
        query = (query or "").strip()
        return Patient.objects.filter(
            Q(first_name__icontains=query) | Q(last_name__icontains=query)
        )
