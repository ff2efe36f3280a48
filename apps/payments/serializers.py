"""
Serializers for payments app.
"""
from decimal import Decimal

from rest_framework import serializers

from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    """
    Serializer for Payment model.
    """
    patient_id = serializers.IntegerField(read_only=True)
    prescription_id = serializers.IntegerField(read_only=True, allow_null=True)
    created_by_id = serializers.IntegerField(read_only=True)
    patient_name = serializers.CharField(source='patient.full_name', read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'patient_id', 'patient_name', 'prescription_id', 'amount',
            'payment_method', 'payment_date', 'notes', 'created_by_id', 'created_at'
        ]
        read_only_fields = fields


class PaymentCreateInputSerializer(serializers.Serializer):
    """
    Input for ``payments.create``.
    """
    patient_id = serializers.IntegerField()
    prescription_id = serializers.IntegerField(required=False, allow_null=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    payment_method = serializers.ChoiceField(choices=Payment.METHOD_CHOICES)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class PrescriptionIdInputSerializer(serializers.Serializer):
    prescription_id = serializers.IntegerField()


class DateInputSerializer(serializers.Serializer):
    date = serializers.DateField()
