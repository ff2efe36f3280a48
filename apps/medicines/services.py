import logging

from django.db import transaction
from django.db.models import Q

from apps.common.exceptions import NotFound
from .models import Medicine

logger = logging.getLogger(__name__)


class MedicineService:
    @staticmethod
    def create_medicine(**fields):
        medicine = Medicine.objects.create(**fields)
        logger.info("Created medicine %s with stock %s", medicine.id, medicine.stock_quantity)
        return medicine

    @staticmethod
    def get_medicines():
        return Medicine.objects.all()

    @staticmethod
    def get_medicine(medicine_id):
        return Medicine.objects.filter(id=medicine_id).first()

    @staticmethod
    def update_medicine(medicine_id, **fields):
        with transaction.atomic():
            medicine = Medicine.objects.select_for_update().filter(id=medicine_id).first()
            if medicine is None:
                raise NotFound("medicine", medicine_id)

            for name, value in fields.items():
                setattr(medicine, name, value)
            medicine.save(update_fields=[*fields, "updated_at"])
        return medicine

    @staticmethod
    def get_low_stock_medicines(threshold):
        """
        Medicines at or below ``threshold`` units, lowest stock first.
        """
        return Medicine.objects.filter(stock_quantity__lte=threshold).order_by("stock_quantity", "name")

    @staticmethod
    def search_medicines(query):
        """
        Match by name substring, or by category value/label.
        """
        query = (query or "").strip()
        category_matches = [
            value for value, label in Medicine.Category.choices
            if query and query.lower() in (value.lower(), label.lower())
        ]
        return Medicine.objects.filter(Q(name__icontains=query) | Q(category__in=category_matches))

    @staticmethod
    def set_stock(medicine_id, quantity):
        """
        Set the on-hand quantity to an absolute value (stock count, restock).
        """
        with transaction.atomic():
            medicine = Medicine.objects.select_for_update().filter(id=medicine_id).first()
            if medicine is None:
                raise NotFound("medicine", medicine_id)
            previous = medicine.stock_quantity
            medicine.stock_quantity = quantity
            medicine.save(update_fields=["stock_quantity", "updated_at"])

        logger.info("Stock for medicine %s set from %s to %s", medicine_id, previous, quantity)
        return medicine
