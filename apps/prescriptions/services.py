"""
Prescription workflow: creation with stock deduction, item fulfillment and
status override.

Stock is consumed when a prescription is written, not when it is filled.
Filling only records how much of the already deducted quantity has been
handed to the patient.
"""
import logging
from collections import OrderedDict

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.accounts.models import User
from apps.common.exceptions import InsufficientStock, InvalidRole, NotFound, OverfillError
from apps.medicines.models import Medicine
from apps.patients.models import Patient
from .models import Prescription, PrescriptionItem

logger = logging.getLogger(__name__)


def derive_prescription_status(items):
    """
    Status of a prescription given the fill state of all of its items.

    Args:
        items: Iterable of objects with ``quantity_filled`` and
            ``quantity_prescribed`` attributes.

    Returns:
        str: ``filled`` when every item is fully dispensed, ``partially_filled``
        when anything has been dispensed, otherwise ``pending``.
    """
    items = list(items)
    if items and all(item.quantity_filled == item.quantity_prescribed for item in items):
        return Prescription.STATUS_FILLED
    if any(item.quantity_filled > 0 for item in items):
        return Prescription.STATUS_PARTIALLY_FILLED
    return Prescription.STATUS_PENDING


class PrescriptionService:
    @staticmethod
    def create_prescription(*, patient_id, doctor_id, items, notes=None):
        """
        Write a prescription and deduct its stock in one transaction.

        Every medicine is locked and checked before anything is written, so a
        failure leaves stock and prescriptions untouched.

        Args:
            patient_id: Patient the prescription is for.
            doctor_id: User with the doctor role.
            items: Non-empty list of dicts with ``medicine_id``,
                ``quantity_prescribed`` and optional ``dosage_instructions``.
            notes: Optional free text.

        Returns:
            Prescription: The new prescription, status ``pending``.
        """
        # Lines for the same medicine are checked against their combined quantity.
        requested = OrderedDict()
        for item in items:
            medicine_id = item["medicine_id"]
            requested[medicine_id] = requested.get(medicine_id, 0) + item["quantity_prescribed"]

        with transaction.atomic():
            if not Patient.objects.filter(id=patient_id).exists():
                raise NotFound("patient", patient_id)

            doctor = User.objects.filter(id=doctor_id).first()
            if doctor is None:
                raise NotFound("doctor", doctor_id)
            if doctor.role != User.ROLE_DOCTOR:
                raise InvalidRole(doctor.id, User.ROLE_DOCTOR, doctor.role)

            locked = Medicine.objects.select_for_update().filter(id__in=requested).order_by("id")
            medicines = {medicine.id: medicine for medicine in locked}

            for medicine_id, quantity in requested.items():
                medicine = medicines.get(medicine_id)
                if medicine is None:
                    raise NotFound("medicine", medicine_id)
                if medicine.stock_quantity < quantity:
                    logger.warning(
                        "Rejected prescription for patient %s: medicine %s has %s, needs %s",
                        patient_id, medicine_id, medicine.stock_quantity, quantity,
                    )
                    raise InsufficientStock(medicine_id, medicine.stock_quantity, quantity)

            prescription = Prescription.objects.create(
                patient_id=patient_id,
                doctor_id=doctor_id,
                notes=notes or None,
                status=Prescription.STATUS_PENDING,
            )
            PrescriptionItem.objects.bulk_create([
                PrescriptionItem(
                    prescription=prescription,
                    medicine_id=item["medicine_id"],
                    quantity_prescribed=item["quantity_prescribed"],
                    quantity_filled=0,
                    dosage_instructions=item.get("dosage_instructions") or None,
                )
                for item in items
            ])

            now = timezone.now()
            for medicine_id, quantity in requested.items():
                Medicine.objects.filter(id=medicine_id).update(
                    stock_quantity=F("stock_quantity") - quantity,
                    updated_at=now,
                )

        logger.info(
            "Created prescription %s for patient %s by doctor %s with %s item(s)",
            prescription.id, patient_id, doctor_id, len(items),
        )
        return prescription

    @staticmethod
    def fill_item(item_id, quantity_filled):
        """
        Record ``quantity_filled`` more units dispensed for an item.

        The item and its prescription are locked for the duration, and the
        prescription status is recomputed from all of its items.

        Returns:
            PrescriptionItem: The updated item.
        """
        if quantity_filled < 0:
            raise ValidationError({"quantity_filled": ["Fill quantity cannot be negative."]})

        with transaction.atomic():
            item = PrescriptionItem.objects.select_for_update().filter(id=item_id).first()
            if item is None:
                raise NotFound("prescription_item", item_id)
            prescription = Prescription.objects.select_for_update().get(id=item.prescription_id)

            new_filled = item.quantity_filled + quantity_filled
            if new_filled > item.quantity_prescribed:
                logger.warning(
                    "Rejected fill of %s for item %s (%s/%s filled)",
                    quantity_filled, item_id, item.quantity_filled, item.quantity_prescribed,
                )
                raise OverfillError(item.quantity_prescribed, item.quantity_filled, quantity_filled)

            if new_filled != item.quantity_filled:
                item.quantity_filled = new_filled
                item.save(update_fields=["quantity_filled"])

            status = derive_prescription_status(prescription.items.all())
            if status != prescription.status:
                prescription.status = status
                prescription.save(update_fields=["status", "updated_at"])

        logger.info(
            "Filled %s of item %s (%s/%s); prescription %s is %s",
            quantity_filled, item_id, item.quantity_filled, item.quantity_prescribed,
            prescription.id, prescription.status,
        )
        return item

    @staticmethod
    def update_status(prescription_id, status):
        """
        Set the status directly, regardless of what the items say.

        This is an administrative override; the next fill recomputes the
        status from the items again.
        """
        with transaction.atomic():
            prescription = Prescription.objects.select_for_update().filter(id=prescription_id).first()
            if prescription is None:
                raise NotFound("prescription", prescription_id)
            previous = prescription.status
            prescription.status = status
            prescription.save(update_fields=["status", "updated_at"])

        logger.info("Status of prescription %s overridden from %s to %s", prescription_id, previous, status)
        return prescription

    @staticmethod
    def get_prescriptions():
        return Prescription.objects.select_related("patient", "doctor")

    @staticmethod
    def get_prescription(prescription_id):
        return (
            Prescription.objects.select_related("patient", "doctor")
            .prefetch_related("items__medicine")
            .filter(id=prescription_id)
            .first()
        )

    @staticmethod
    def get_prescriptions_by_patient(patient_id):
        return PrescriptionService.get_prescriptions().filter(patient_id=patient_id)

    @staticmethod
    def get_prescriptions_by_doctor(doctor_id):
        return PrescriptionService.get_prescriptions().filter(doctor_id=doctor_id)

    @staticmethod
    def get_pending_prescriptions():
        return PrescriptionService.get_prescriptions().filter(status=Prescription.STATUS_PENDING)
