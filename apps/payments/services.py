import logging

from django.db.models import Count, Sum

from apps.common.exceptions import NotFound
from apps.patients.models import Patient
from apps.prescriptions.models import Prescription
from .models import Payment

logger = logging.getLogger(__name__)


class PaymentService:
    @staticmethod
    def create_payment(*, patient_id, amount, payment_method, created_by, prescription_id=None, notes=None):
        """
        Record a payment taken by ``created_by``.

        The prescription, when given, must belong to the same patient.
        """
        if not Patient.objects.filter(id=patient_id).exists():
            raise NotFound("patient", patient_id)
        if prescription_id is not None and not Prescription.objects.filter(
            id=prescription_id, patient_id=patient_id
        ).exists():
            raise NotFound("prescription", prescription_id)

        payment = Payment.objects.create(
            patient_id=patient_id,
            prescription_id=prescription_id,
            amount=amount,
            payment_method=payment_method,
            notes=notes or None,
            created_by=created_by,
        )
        logger.info("Recorded %s payment %s of %s for patient %s", payment_method, payment.id, amount, patient_id)
        return payment

    @staticmethod
    def get_payments():
        return Payment.objects.select_related("patient")

    @staticmethod
    def get_payment(payment_id):
        return PaymentService.get_payments().filter(id=payment_id).first()

    @staticmethod
    def get_payments_by_patient(patient_id):
        return PaymentService.get_payments().filter(patient_id=patient_id)

    @staticmethod
    def get_payments_by_prescription(prescription_id):
        return PaymentService.get_payments().filter(prescription_id=prescription_id)

    @staticmethod
    def get_payments_by_date_range(start_date, end_date):
        """Payments whose local calendar date falls within the inclusive range."""
        return PaymentService.get_payments().filter(payment_date__date__range=(start_date, end_date))

    @staticmethod
    def get_daily_summary(date):
        payments = Payment.objects.filter(payment_date__date=date)
        totals = payments.aggregate(total=Sum("amount"), count=Count("id"))
        by_method = {
            row["payment_method"]: float(row["total"])
            for row in payments.values("payment_method").annotate(total=Sum("amount")).order_by("payment_method")
        }
        return {
            "total": float(totals["total"] or 0),
            "count": totals["count"],
            "by_method": by_method,
        }
