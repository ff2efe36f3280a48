"""
Serializers for prescriptions app.

Handles serialization of Prescription and PrescriptionItem models and
validation of the prescription workflow input.
"""
from rest_framework import serializers

from .models import Prescription, PrescriptionItem


class PrescriptionItemSerializer(serializers.ModelSerializer):
    """
    Serializer for PrescriptionItem model.
    """
    medicine_name = serializers.CharField(source='medicine.name', read_only=True)
    prescription_id = serializers.IntegerField(read_only=True)
    medicine_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = PrescriptionItem
        fields = [
            'id', 'prescription_id', 'medicine_id', 'medicine_name',
            'quantity_prescribed', 'quantity_filled', 'dosage_instructions',
            'created_at'
        ]
        read_only_fields = fields


class PrescriptionSerializer(serializers.ModelSerializer):
    """
    Serializer for Prescription model, without items.
    """
    patient_id = serializers.IntegerField(read_only=True)
    doctor_id = serializers.IntegerField(read_only=True)
    patient_name = serializers.CharField(source='patient.full_name', read_only=True)
    doctor_name = serializers.CharField(source='doctor.get_full_name', read_only=True)

    class Meta:
        model = Prescription
        fields = [
            'id', 'patient_id', 'patient_name', 'doctor_id', 'doctor_name',
            'status', 'notes', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class PrescriptionDetailSerializer(PrescriptionSerializer):
    items = PrescriptionItemSerializer(many=True, read_only=True)

    class Meta(PrescriptionSerializer.Meta):
        fields = PrescriptionSerializer.Meta.fields + ['items']
        read_only_fields = fields


class PrescriptionItemInputSerializer(serializers.Serializer):
    medicine_id = serializers.IntegerField()
    quantity_prescribed = serializers.IntegerField(min_value=1)
    dosage_instructions = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class PrescriptionCreateInputSerializer(serializers.Serializer):
    """
    Input for ``prescriptions.create``.
    """
    patient_id = serializers.IntegerField()
    doctor_id = serializers.IntegerField()
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    items = PrescriptionItemInputSerializer(many=True, allow_empty=False)


class FillItemInputSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    quantity_filled = serializers.IntegerField(min_value=0)


class StatusUpdateInputSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    status = serializers.ChoiceField(choices=Prescription.STATUS_CHOICES)

