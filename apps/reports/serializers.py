"""
Input serializers for report procedures.
"""
from rest_framework import serializers

from apps.common.serializers import DateRangeInputSerializer
from apps.medicines.models import Medicine


class SalesReportInputSerializer(DateRangeInputSerializer):
    doctor_id = serializers.IntegerField(required=False)
    medicine_category = serializers.ChoiceField(choices=Medicine.Category.choices, required=False)


class MedicineUsageInputSerializer(DateRangeInputSerializer):
    medicine_id = serializers.IntegerField(required=False)


class MonthlySummaryInputSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1, max_value=9999)
    month = serializers.IntegerField(min_value=1, max_value=12)
