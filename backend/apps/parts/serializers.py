"""
Serializers for the parts app.
"""
from rest_framework import serializers

from .models import MeasurementUnit, Part
from .services import SIFormatter


class MeasurementUnitSerializer(serializers.ModelSerializer):
    """Serializer for measurement units"""

    class Meta:
        model = MeasurementUnit
        fields = '__all__'


class PartSerializer(serializers.ModelSerializer):
    """Serializer for parts, mass and amounts travel as plain numbers"""
    mass_display = serializers.SerializerMethodField()
    tag_list = serializers.ListField(child=serializers.CharField(), read_only=True)

    class Meta:
        model = Part
        fields = '__all__'

    def get_mass_display(self, obj) -> str:
        """Return the mass with an SI prefix, e.g. '1.2 kg'"""
        if obj.mass is None:
            return ''
        return SIFormatter.from_settings().format(obj.mass, 'g')
