"""
Form field for numbers entered as a mantissa plus an SI prefix.
"""
from django import forms
from django.core.exceptions import ValidationError

from .services import (
    SI_PREFIXES, UNSET, SIUnitConfig, SIValueError, from_view, to_view,
)

PREFIX_CHOICES = [(magnitude, symbol) for magnitude, symbol in SI_PREFIXES]

# Bootstrap classes marking compact and invalid inputs
SMALL_INPUT_CLASS = 'form-control-sm'
INVALID_INPUT_CLASS = 'is-invalid'

# Set by SIUnitBoundField, consumed by SIUnitWidget.get_context
INVALID_MARKER = 'data-si-invalid'


class SIUnitWidget(forms.MultiWidget):
    """
    Renders a number input named `<name>_value` and, if the unit uses SI
    prefixes, a `<name>_prefix` select, followed by the unit symbol.

    Without an explicit formatter the prefix range is read from settings
    each time a value is split.
    """
    template_name = 'parts/widgets/si_unit.html'

    def __init__(self, config, formatter=None, attrs=None):
        self.config = config
        self.formatter = formatter
        value_widget = forms.NumberInput if config.html5 else forms.TextInput
        widgets = {'value': value_widget(attrs=config.html_attrs())}
        if config.show_prefix:
            widgets['prefix'] = forms.Select(choices=PREFIX_CHOICES)
        super().__init__(widgets, attrs)

    def decompress(self, value):
        return list(to_view(value, self.config, self.formatter).values())

    def get_context(self, name, value, attrs):
        attrs = dict(attrs or {})
        invalid = attrs.pop(INVALID_MARKER, False)
        if invalid:
            attrs.pop('aria-invalid', None)

        context = super().get_context(name, value, attrs)
        css_class = context['widget']['attrs'].get('class', '')
        context['widget']['sm'] = SMALL_INPUT_CLASS in css_class
        context['widget']['unit'] = self.config.unit

        # Errors belong to the mantissa, never to the prefix select
        if invalid:
            value_attrs = context['widget']['subwidgets'][0]['attrs']
            value_attrs['class'] = f"{value_attrs.get('class', '')} {INVALID_INPUT_CLASS}".strip()
            value_attrs['aria-invalid'] = 'true'
        return context


class SIUnitBoundField(forms.BoundField):
    """Flags the widget when the field has errors."""

    def build_widget_attrs(self, attrs, widget=None):
        attrs = super().build_widget_attrs(attrs, widget)
        if self.form.is_bound and self.errors:
            attrs[INVALID_MARKER] = True
        return attrs


class SIUnitField(forms.MultiValueField):
    """
    Compound field mapping one float to a mantissa and an SI prefix exponent.

    Options are resolved once from `measurement_unit`; without a unit the
    `unit` keyword is mandatory.
    """
    default_error_messages = {
        'out_of_range': 'Enter a smaller number or prefix.',
        'invalid_prefix': 'Select a valid SI prefix.',
    }

    def __init__(self, measurement_unit=None, *, unit=UNSET, show_prefix=None,
                 is_integer=None, min_value=0, max_value=None, step=None,
                 html5=True, formatter=None, **kwargs):
        self.config = SIUnitConfig.resolve(
            measurement_unit,
            unit=unit,
            show_prefix=show_prefix,
            is_integer=is_integer,
            min_value=min_value,
            max_value=max_value,
            step=step,
            html5=html5,
        )
        self.formatter = formatter

        fields = [forms.FloatField()]
        if self.config.show_prefix:
            fields.append(forms.TypedChoiceField(
                choices=PREFIX_CHOICES, coerce=int, empty_value=0,
            ))

        kwargs.setdefault('widget', SIUnitWidget(self.config, self.formatter))
        super().__init__(fields, **kwargs)

    def get_bound_field(self, form, field_name):
        return SIUnitBoundField(form, self, field_name)

    def compress(self, data_list):
        if not data_list:
            return None
        data = dict(zip(('value', 'prefix'), data_list))
        try:
            return from_view(data, self.config)
        except SIValueError as e:
            if e.code == 'invalid':
                message = self.fields[0].error_messages['invalid']
            else:
                message = self.error_messages[e.code]
            raise ValidationError(message, code=e.code) from e
