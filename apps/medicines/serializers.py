"""
Serializers for medicines app.

Handles serialization/deserialization of the Medicine model.
"""
from django.conf import settings
from django.core.validators import MaxValueValidator
from django.utils import timezone
from rest_framework import serializers

from .models import Medicine


class MedicineSerializer(serializers.ModelSerializer):
    """
    Serializer for Medicine model.

    Also used as the ``medicines.create`` input; stock must be non-negative
    and the price positive.
    """
    is_low_stock = serializers.SerializerMethodField()
    is_expired = serializers.SerializerMethodField()

    class Meta:
        model = Medicine
        fields = [
            'id', 'name', 'category', 'stock_quantity', 'price_per_unit',
            'supplier_info', 'batch_number', 'expiry_date', 'storage_conditions',
            'is_low_stock', 'is_expired',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at', 'is_low_stock', 'is_expired']
        extra_kwargs = {
            'stock_quantity': {'required': True, 'min_value': 0},
        }

    def get_is_low_stock(self, obj):
        """Check stock against the configured low-stock threshold."""
        return obj.is_low_stock(settings.LOW_STOCK_THRESHOLD)

    def get_is_expired(self, obj):
        return obj.is_expired(timezone.localdate())


class MedicineUpdateInputSerializer(MedicineSerializer):
    """
    Input for ``medicines.update``: the id plus any subset of medicine fields.
    """
    id = serializers.IntegerField()

    class Meta(MedicineSerializer.Meta):
        read_only_fields = ['created_at', 'updated_at', 'is_low_stock', 'is_expired']
        extra_kwargs = {
            'name': {'required': False},
            'category': {'required': False},
            'stock_quantity': {'required': False, 'min_value': 0},
            'price_per_unit': {'required': False},
        }


def column_max_value(model, field_name):
    """Largest value the database column behind an integer model field accepts."""
    limits = [
        validator.limit_value
        for validator in model._meta.get_field(field_name).validators
        if isinstance(validator, MaxValueValidator)
    ]
    return min(limits) if limits else None


class StockUpdateInputSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    quantity = serializers.IntegerField(
        min_value=0,
        max_value=column_max_value(Medicine, "stock_quantity"),
    )
