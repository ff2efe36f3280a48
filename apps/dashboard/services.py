"""
Role dashboards.

Every figure is computed relative to an ``as_of`` moment: "today" is the
local calendar date of ``as_of`` and rows created after it are ignored.
"""
from datetime import timedelta

from django.conf import settings
from django.db.models import Exists, Max, OuterRef, Sum
from django.utils import timezone

from apps.accounts.models import User
from apps.common.exceptions import InvalidRole, NotFound
from apps.medicines.models import Medicine
from apps.patients.models import Patient
from apps.payments.models import Payment
from apps.prescriptions.models import Prescription, PrescriptionItem

RECENT_ACTIVITY_LIMIT = 10
RECENT_PATIENT_LIMIT = 5
RECENT_PAYMENT_LIMIT = 10


def _low_stock_count():
    return Medicine.objects.filter(stock_quantity__lte=settings.LOW_STOCK_THRESHOLD).count()


def _sum_amount(payments):
    return float(payments.aggregate(total=Sum("amount"))["total"] or 0)


class DashboardService:
    @staticmethod
    def get_admin_dashboard(as_of=None):
        as_of = as_of or timezone.now()
        today = timezone.localdate(as_of)

        patients = Patient.objects.filter(created_at__lte=as_of)
        prescriptions = Prescription.objects.filter(created_at__lte=as_of)
        payments = Payment.objects.filter(payment_date__lte=as_of)

        return {
            "total_patients": patients.count(),
            "total_doctors": User.objects.filter(role=User.ROLE_DOCTOR, is_active=True).count(),
            "total_medicines": Medicine.objects.filter(created_at__lte=as_of).count(),
            "total_prescriptions": prescriptions.count(),
            "today_sales": _sum_amount(payments.filter(payment_date__date=today)),
            "today_patients": patients.filter(created_at__date=today).count(),
            "low_stock_count": _low_stock_count(),
            "pending_prescriptions": prescriptions.filter(status=Prescription.STATUS_PENDING).count(),
            "recent_activities": DashboardService.get_recent_activities(as_of),
        }

    @staticmethod
    def get_recent_activities(as_of, limit=RECENT_ACTIVITY_LIMIT):
        """
        The latest patients, prescriptions, payments and medicines, merged
        newest first.
        """
        activities = []
        for patient in Patient.objects.filter(created_at__lte=as_of).order_by("-created_at")[:limit]:
            activities.append({
                "type": "patient",
                "description": f"New patient registered: {patient.full_name}",
                "timestamp": patient.created_at,
                "user_id": None,
            })
        prescriptions = (
            Prescription.objects.filter(created_at__lte=as_of)
            .select_related("patient")
            .order_by("-created_at")[:limit]
        )
        for prescription in prescriptions:
            activities.append({
                "type": "prescription",
                "description": f"Prescription #{prescription.id} written for {prescription.patient.full_name}",
                "timestamp": prescription.created_at,
                "user_id": prescription.doctor_id,
            })
        payments = (
            Payment.objects.filter(payment_date__lte=as_of)
            .select_related("patient")
            .order_by("-payment_date")[:limit]
        )
        for payment in payments:
            activities.append({
                "type": "payment",
                "description": f"Payment of {payment.amount} received from {payment.patient.full_name}",
                "timestamp": payment.payment_date,
                "user_id": payment.created_by_id,
            })
        for medicine in Medicine.objects.filter(created_at__lte=as_of).order_by("-created_at")[:limit]:
            activities.append({
                "type": "medicine",
                "description": f"Medicine added: {medicine.name}",
                "timestamp": medicine.created_at,
                "user_id": None,
            })

        activities.sort(key=lambda activity: activity["timestamp"], reverse=True)
        activities = activities[:limit]
        for activity in activities:
            activity["timestamp"] = activity["timestamp"].isoformat()
        return activities

    @staticmethod
    def get_doctor_dashboard(doctor_id, as_of=None):
        as_of = as_of or timezone.now()
        today = timezone.localdate(as_of)

        doctor = User.objects.filter(id=doctor_id).first()
        if doctor is None:
            raise NotFound("doctor", doctor_id)
        if doctor.role != User.ROLE_DOCTOR:
            raise InvalidRole(doctor.id, User.ROLE_DOCTOR, doctor.role)

        prescriptions = Prescription.objects.filter(doctor_id=doctor_id, created_at__lte=as_of)
        todays = prescriptions.filter(created_at__date=today)

        recent_patients = (
            prescriptions.values("patient_id", "patient__first_name", "patient__last_name")
            .annotate(last_visit=Max("created_at"))
            .order_by("-last_visit")[:RECENT_PATIENT_LIMIT]
        )
        most_prescribed = (
            PrescriptionItem.objects.filter(prescription__in=prescriptions)
            .values("medicine__name")
            .annotate(total=Sum("quantity_prescribed"))
            .order_by("-total", "medicine__name")
            .first()
        )

        return {
            "my_prescriptions_today": todays.count(),
            "my_patients_today": todays.order_by().values("patient_id").distinct().count(),
            "my_total_prescriptions": prescriptions.count(),
            "pending_prescriptions": prescriptions.filter(status=Prescription.STATUS_PENDING).count(),
            "recent_patients": [
                {
                    "id": row["patient_id"],
                    "name": f"{row['patient__first_name']} {row['patient__last_name']}",
                    "last_visit": row["last_visit"].isoformat(),
                }
                for row in recent_patients
            ],
            "prescription_stats": {
                "this_week": prescriptions.filter(created_at__gt=as_of - timedelta(days=7)).count(),
                "this_month": prescriptions.filter(
                    created_at__year=today.year,
                    created_at__month=today.month,
                ).count(),
                "most_prescribed_medicine": most_prescribed["medicine__name"] if most_prescribed else "",
            },
        }

    @staticmethod
    def get_cashier_dashboard(as_of=None):
        as_of = as_of or timezone.now()
        today = timezone.localdate(as_of)

        todays_payments = Payment.objects.filter(payment_date__date=today, payment_date__lte=as_of)
        by_method = {
            row["payment_method"]: float(row["total"])
            for row in todays_payments.values("payment_method").annotate(total=Sum("amount")).order_by()
        }
        recent_payments = (
            Payment.objects.filter(payment_date__lte=as_of)
            .select_related("patient")
            .order_by("-payment_date", "-id")[:RECENT_PAYMENT_LIMIT]
        )
        unpaid_prescriptions = Prescription.objects.filter(created_at__lte=as_of).exclude(
            Exists(Payment.objects.filter(prescription=OuterRef("pk"), payment_date__lte=as_of))
        )

        return {
            "today_sales": _sum_amount(todays_payments),
            "today_transactions": todays_payments.count(),
            "pending_payments": unpaid_prescriptions.count(),
            "low_stock_alerts": _low_stock_count(),
            "recent_payments": [
                {
                    "id": payment.id,
                    "patient_name": payment.patient.full_name,
                    "amount": float(payment.amount),
                    "payment_method": payment.payment_method,
                    "timestamp": payment.payment_date.isoformat(),
                }
                for payment in recent_payments
            ],
            "payment_stats": {
                "cash_payments": by_method.get(Payment.METHOD_CASH, 0.0),
                "card_payments": by_method.get(Payment.METHOD_CARD, 0.0),
                "insurance_payments": by_method.get(Payment.METHOD_INSURANCE, 0.0),
            },
        }
