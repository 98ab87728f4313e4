import math

import pytest
from django.core.exceptions import ImproperlyConfigured

from apps.parts.services import (
    SI_PREFIXES, SIFormatter, SIUnitConfig, SIValue, SIValueError,
    from_view, scale_value, to_view, unscale_value,
)
from tests.factories import MeasurementUnitFactory

PREFIXED = SIUnitConfig(unit='Ω', show_prefix=True)
PLAIN = SIUnitConfig(unit='g', show_prefix=False)


@pytest.mark.parametrize("value, mantissa, magnitude", [
    (3300, 3.3, 3),
    (0.0025, 2.5, -3),
    (4.7e6, 4.7, 6),
    (12, 12, 0),
    (999.5, 999.5, 0),
    (1000, 1, 3),
    (0.000047, 47, -6),
    (-2200, -2.2, 3),
])
def test_convert_value_picks_largest_fitting_prefix(formatter, value, mantissa, magnitude):
    """Test that the largest prefix keeping the mantissa in [1, 1000) is used."""
    converted = formatter.convert_value(value)
    assert converted.value == pytest.approx(mantissa)
    assert converted.prefix_magnitude == magnitude


@pytest.mark.parametrize("value", [0, 0.0, 1e12, 5e-9, float("inf")])
def test_convert_value_falls_back_to_no_prefix(formatter, value):
    """Test that zero, infinite and out of range values stay unscaled."""
    converted = formatter.convert_value(value)
    assert converted.prefix_magnitude == 0
    assert converted.value == value


def test_convert_value_exact_for_decimal_inputs(formatter):
    """Test that splitting does not introduce binary noise in the mantissa."""
    assert formatter.convert_value(0.0047).value == 4.7
    assert formatter.convert_value(3300).value == 3.3


def test_prefix_symbols(formatter):
    """Test the symbol belonging to each exponent."""
    assert [symbol for _, symbol in SI_PREFIXES] == ['M', 'k', '', 'm', 'µ']
    assert formatter.convert_value(3300).prefix == 'k'
    assert SIValue(2.5, -6).prefix == 'µ'


def test_custom_mantissa_range():
    """Test that the boundary policy is configurable."""
    formatter = SIFormatter(lower=0.1, upper=100)
    converted = formatter.convert_value(470)
    assert converted.value == pytest.approx(0.47)
    assert converted.prefix_magnitude == 3


@pytest.mark.parametrize("lower, upper", [(0, 1000), (10, 10), (100, 1)])
def test_invalid_mantissa_range(lower, upper):
    """Test that nonsensical ranges are rejected at setup."""
    with pytest.raises(ImproperlyConfigured):
        SIFormatter(lower, upper)


def test_from_settings(settings):
    """Test that the range is read from the Django settings."""
    settings.SI_PREFIX_MANTISSA_RANGE = (1, 10)
    formatter = SIFormatter.from_settings()
    assert formatter.convert_value(47).prefix_magnitude == 0
    assert formatter.convert_value(4700).value == pytest.approx(4.7)

    settings.SI_PREFIX_MANTISSA_RANGE = "wide"
    with pytest.raises(ImproperlyConfigured):
        SIFormatter.from_settings()


@pytest.mark.parametrize("value, unit, expected", [
    (3300, 'Ω', '3.3 kΩ'),
    (12.5, 'g', '12.5 g'),
    (0.0025, 'A', '2.5 mA'),
    (1e6, 'Hz', '1 MHz'),
    (42, '', '42'),
])
def test_format(formatter, value, unit, expected):
    """Test the human readable rendering."""
    assert formatter.format(value, unit) == expected


@pytest.mark.parametrize("magnitude", [magnitude for magnitude, _ in SI_PREFIXES])
@pytest.mark.parametrize("mantissa", [1, 2.2, 4.7, 33, 100, 999.9])
def test_split_then_combine_restores_value(formatter, magnitude, mantissa):
    """Test that mantissa * 10^e survives a split and a recombination."""
    value = unscale_value(mantissa, magnitude)
    view = to_view(value, PREFIXED, formatter)
    assert from_view(view, PREFIXED) == pytest.approx(value, rel=1e-12)


@pytest.mark.parametrize("value", [0, 0.5, 1, 3300, 0.0025, 1.23456789e8, 7.5e-7, 1e15, 1e-12])
def test_combine_of_split_is_identity(formatter, value):
    """Test the round trip for small, large and zero values."""
    view = to_view(value, PREFIXED, formatter)
    assert from_view(view, PREFIXED) == pytest.approx(value, rel=1e-12)


def test_scale_helpers_are_inverse():
    """Test scale_value and unscale_value against each other."""
    assert scale_value(3300, 3) == 3.3
    assert unscale_value(3.3, 3) == 3300
    assert scale_value(0.0025, -3) == 2.5
    assert unscale_value(2.5, -3) == 0.0025


def test_to_view_examples(formatter):
    """Test the documented display splits."""
    assert to_view(3300, PREFIXED, formatter) == {'value': 3.3, 'prefix': 3}
    assert to_view(0.0025, PREFIXED, formatter) == {'value': 2.5, 'prefix': -3}
    assert to_view(42, PLAIN, formatter) == {'value': 42}


def test_to_view_without_value(formatter):
    """Test that an empty model value leaves the mantissa empty."""
    assert to_view(None, PREFIXED, formatter) == {'value': None, 'prefix': 0}
    assert to_view(None, PLAIN, formatter) == {'value': None}


def test_to_view_without_prefix_keeps_raw_value(formatter):
    """Test that a field without prefix never scales."""
    assert to_view(3300, PLAIN, formatter) == {'value': 3300}


def test_from_view_examples():
    """Test the documented recombinations."""
    assert from_view({'value': 3.3, 'prefix': 3}, PREFIXED) == 3300
    assert from_view({'value': '2.5', 'prefix': '-3'}, PREFIXED) == 0.0025
    assert from_view({'value': 42}, PLAIN) == 42


def test_from_view_missing_prefix_means_no_scaling():
    """Test that a missing prefix selection counts as exponent 0."""
    assert from_view({'value': 5}, PREFIXED) == 5
    assert from_view({'value': 5, 'prefix': ''}, PREFIXED) == 5


def test_from_view_ignores_prefix_on_plain_field():
    """Test that a stray prefix is ignored when the field has none."""
    assert from_view({'value': 5, 'prefix': 3}, PLAIN) == 5


@pytest.mark.parametrize("raw", [None, '', '   '])
def test_from_view_empty_mantissa(raw):
    """Test that an empty mantissa means no value."""
    assert from_view({'value': raw, 'prefix': 3}, PREFIXED) is None


@pytest.mark.parametrize("raw", ['abc', '3,3k', 'nan', 'inf', object()])
def test_from_view_rejects_non_numeric_mantissa(raw):
    """Test that a bad mantissa raises an error on the 'value' sub-field."""
    with pytest.raises(SIValueError) as excinfo:
        from_view({'value': raw, 'prefix': 0}, PREFIXED)
    assert excinfo.value.field == 'value'
    assert excinfo.value.raw is raw


@pytest.mark.django_db
def test_config_from_measurement_unit():
    """Test that options are derived from the measurement unit."""
    unit = MeasurementUnitFactory(unit='m', use_si_prefix=True, is_integer=False)
    config = SIUnitConfig.resolve(unit)
    assert config.unit == 'm'
    assert config.show_prefix is True
    assert config.is_integer is False
    assert config.step == 'any'
    assert config.min_value == 0
    assert config.max_value is None


@pytest.mark.django_db
def test_config_integer_unit_steps_by_one():
    """Test that integer units get a step of 1."""
    unit = MeasurementUnitFactory(unit=None, use_si_prefix=False, is_integer=True)
    config = SIUnitConfig.resolve(unit)
    assert config.step == 1
    assert config.unit is None
    assert config.show_prefix is False


@pytest.mark.django_db
def test_config_explicit_options_win():
    """Test that explicit options override what the unit says."""
    unit = MeasurementUnitFactory(unit='m', use_si_prefix=True)
    config = SIUnitConfig.resolve(unit, unit='mm', show_prefix=False, step=0.5)
    assert config.unit == 'mm'
    assert config.show_prefix is False
    assert config.step == 0.5


def test_config_without_unit_needs_unit_option():
    """Test that a missing unit option is a setup error."""
    with pytest.raises(ImproperlyConfigured):
        SIUnitConfig.resolve()
    assert SIUnitConfig.resolve(unit=None).unit is None
    assert SIUnitConfig.resolve(unit='g').show_prefix is False


def test_html_attrs():
    """Test the number input constraints."""
    assert SIUnitConfig(max_value=10, step=1).html_attrs() == {'step': '1', 'min': '0', 'max': '10'}
    assert SIUnitConfig(min_value=None).html_attrs() == {'step': 'any'}
    assert SIUnitConfig(html5=False).html_attrs() == {}


def test_nan_is_left_alone(formatter):
    """Test that NaN does not break the prefix search."""
    assert math.isnan(formatter.convert_value(float("nan")).value)


@pytest.mark.parametrize("prefix", [7, 9, -9, 'k', '1.5', object()])
def test_from_view_rejects_unknown_prefix(prefix):
    """Test that only the five known exponents are accepted."""
    with pytest.raises(SIValueError) as excinfo:
        from_view({'value': 1, 'prefix': prefix}, PREFIXED)
    assert excinfo.value.field == 'prefix'
    assert excinfo.value.code == 'invalid_prefix'


def test_from_view_rejects_overflow():
    """Test that a finite mantissa scaled past the float range is refused."""
    with pytest.raises(SIValueError) as excinfo:
        from_view({'value': '1e308', 'prefix': 6}, PREFIXED)
    assert excinfo.value.field == 'value'
    assert excinfo.value.code == 'out_of_range'
