from rest_framework import serializers


class AsOfInputSerializer(serializers.Serializer):
    """Optional reference moment; dashboards default to now."""
    as_of = serializers.DateTimeField(required=False)


class DoctorDashboardInputSerializer(AsOfInputSerializer):
    doctor_id = serializers.IntegerField()
