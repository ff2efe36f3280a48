"""
Sales and medicine usage reporting.

All windows are inclusive calendar-date ranges evaluated in the project time
zone. Amounts are returned as floats.
"""
import calendar
from collections import defaultdict
from datetime import date

from django.conf import settings
from django.db.models import Count, Sum
from django.db.models.functions import TruncDate

from apps.medicines.models import Medicine
from apps.patients.models import Patient
from apps.payments.models import Payment
from apps.prescriptions.models import Prescription, PrescriptionItem

MIN_REORDER_LEVEL = 20


class ReportService:
    @staticmethod
    def get_sales_report(start_date, end_date, doctor_id=None, medicine_category=None):
        """
        Payments taken between ``start_date`` and ``end_date``.

        ``doctor_id`` narrows only the per-doctor breakdown and
        ``medicine_category`` only the per-category breakdown. A payment is
        counted once for each distinct medicine category on its prescription.
        """
        payments = Payment.objects.filter(payment_date__date__range=(start_date, end_date))
        totals = payments.aggregate(total=Sum("amount"), count=Count("id"))

        by_date = (
            payments.annotate(day=TruncDate("payment_date"))
            .values("day")
            .annotate(amount=Sum("amount"), transactions=Count("id"))
            .order_by("day")
        )

        doctor_payments = payments.filter(prescription__isnull=False)
        if doctor_id is not None:
            doctor_payments = doctor_payments.filter(prescription__doctor_id=doctor_id)
        by_doctor = (
            doctor_payments.values(
                "prescription__doctor_id",
                "prescription__doctor__first_name",
                "prescription__doctor__last_name",
            )
            .annotate(amount=Sum("amount"), transactions=Count("id"))
            .order_by("-amount", "prescription__doctor_id")
        )

        category_rows = (
            payments.values("id", "amount", "prescription__items__medicine__category")
            .order_by()
            .distinct()
        )
        by_category = defaultdict(lambda: {"amount": 0, "transactions": 0})
        for row in category_rows:
            category = row["prescription__items__medicine__category"]
            if category is None:
                continue
            if medicine_category and category != medicine_category:
                continue
            by_category[category]["amount"] += row["amount"]
            by_category[category]["transactions"] += 1

        return {
            "total_sales": float(totals["total"] or 0),
            "total_transactions": totals["count"],
            "sales_by_date": [
                {
                    "date": row["day"].isoformat(),
                    "amount": float(row["amount"]),
                    "transactions": row["transactions"],
                }
                for row in by_date
            ],
            "sales_by_doctor": [
                {
                    "doctor_id": row["prescription__doctor_id"],
                    "doctor_name": (
                        f"{row['prescription__doctor__first_name']} {row['prescription__doctor__last_name']}"
                    ).strip(),
                    "amount": float(row["amount"]),
                    "transactions": row["transactions"],
                }
                for row in by_doctor
            ],
            "sales_by_category": sorted(
                (
                    {
                        "category": category,
                        "amount": float(values["amount"]),
                        "transactions": values["transactions"],
                    }
                    for category, values in by_category.items()
                ),
                key=lambda entry: (-entry["amount"], entry["category"]),
            ),
        }

    @staticmethod
    def get_medicine_usage_report(start_date, end_date, medicine_id=None):
        """
        Dispensed quantities for prescriptions written in the window.

        ``medicine_id`` narrows only the per-medicine breakdown.
        """
        items = PrescriptionItem.objects.filter(prescription__created_at__date__range=(start_date, end_date))
        total = items.aggregate(total=Sum("quantity_filled"))["total"] or 0

        medicine_items = items if medicine_id is None else items.filter(medicine_id=medicine_id)
        by_medicine = (
            medicine_items.values("medicine_id", "medicine__name", "medicine__category")
            .annotate(quantity=Sum("quantity_filled"), times=Count("id"))
            .order_by("-quantity", "medicine_id")
        )
        by_category = (
            items.values("medicine__category")
            .annotate(quantity=Sum("quantity_filled"), times=Count("id"))
            .order_by("-quantity", "medicine__category")
        )
        by_date = (
            items.annotate(day=TruncDate("prescription__created_at"))
            .values("day")
            .annotate(quantity=Sum("quantity_filled"), times=Count("id"))
            .order_by("day")
        )

        return {
            "total_medicines_dispensed": total,
            "usage_by_medicine": [
                {
                    "medicine_id": row["medicine_id"],
                    "medicine_name": row["medicine__name"],
                    "category": row["medicine__category"],
                    "quantity_dispensed": row["quantity"],
                    "times_dispensed": row["times"],
                }
                for row in by_medicine
            ],
            "usage_by_category": [
                {
                    "category": row["medicine__category"],
                    "quantity_dispensed": row["quantity"],
                    "times_dispensed": row["times"],
                }
                for row in by_category
            ],
            "usage_by_date": [
                {
                    "date": row["day"].isoformat(),
                    "quantity_dispensed": row["quantity"],
                    "times_dispensed": row["times"],
                }
                for row in by_date
            ],
        }

    @staticmethod
    def get_low_stock_alerts(threshold=None):
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        reorder_level = max(threshold * 2, MIN_REORDER_LEVEL)

        medicines = Medicine.objects.filter(stock_quantity__lte=threshold).order_by("stock_quantity", "name")
        return [
            {
                "medicine_id": medicine.id,
                "medicine_name": medicine.name,
                "category": medicine.category,
                "current_stock": medicine.stock_quantity,
                "recommended_reorder_level": reorder_level,
                "supplier": medicine.supplier_info,
            }
            for medicine in medicines
        ]

    @staticmethod
    def get_monthly_summary(year, month):
        start_date = date(year, month, 1)
        end_date = date(year, month, calendar.monthrange(year, month)[1])
        window = (start_date, end_date)

        return {
            "sales": ReportService.get_sales_report(start_date, end_date),
            "usage": ReportService.get_medicine_usage_report(start_date, end_date),
            "low_stock": ReportService.get_low_stock_alerts(),
            "patient_count": Patient.objects.filter(created_at__date__range=window).count(),
            "prescription_count": Prescription.objects.filter(created_at__date__range=window).count(),
        }
