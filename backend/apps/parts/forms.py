"""
Forms for the parts app.
"""
from django import forms

from .fields import SIUnitField
from .models import Part


class PartForm(forms.ModelForm):
    """Edit form for parts, with SI aware inputs for mass and minimum amount."""

    mass = SIUnitField(unit='g', required=False, label='Mass')

    class Meta:
        model = Part
        fields = (
            'name', 'description', 'part_unit', 'min_amount',
            'needs_review', 'tags', 'mass',
        )
        widgets = {
            'tags': forms.TextInput(attrs={'placeholder': 'smd,resistor,0603'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # The minimum amount is counted in the part's own unit
        part_unit = self.instance.part_unit
        if part_unit is None:
            min_amount = SIUnitField(unit=None, label='Minimum amount')
        else:
            min_amount = SIUnitField(part_unit, label='Minimum amount')
        self.fields['min_amount'] = min_amount
