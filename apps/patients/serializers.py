"""
Serializers for patients app.
"""
from rest_framework import serializers

from .models import Patient


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            'id', 'first_name', 'last_name', 'email', 'phone', 'address',
            'gender', 'birthdate', 'allergies', 'chronic_conditions',
            'medical_history', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class PatientUpdateInputSerializer(PatientSerializer):
    """
    Input for ``patients.update``: the id plus any subset of patient fields.
    """
    id = serializers.IntegerField()

    class Meta(PatientSerializer.Meta):
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {
            field: {'required': False}
            for field in ['first_name', 'last_name', 'gender', 'birthdate']
        }
