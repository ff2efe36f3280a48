"""
Input serializers shared by several apps' procedures.
"""
from rest_framework import serializers


class IdInputSerializer(serializers.Serializer):
    id = serializers.IntegerField()


class PatientIdInputSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()


class DoctorIdInputSerializer(serializers.Serializer):
    doctor_id = serializers.IntegerField()


class SearchInputSerializer(serializers.Serializer):
    query = serializers.CharField(allow_blank=True)


class ThresholdInputSerializer(serializers.Serializer):
    threshold = serializers.IntegerField(required=False, min_value=0)


class DateRangeInputSerializer(serializers.Serializer):
    """
    Inclusive calendar-date range.
    """
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):
        if attrs['start_date'] > attrs['end_date']:
            raise serializers.ValidationError({'end_date': 'End date must not be before start date.'})
        return attrs
