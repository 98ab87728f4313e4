"""
SI prefix handling for numeric part values.

Values are persisted as plain floats. For display and editing they are split
into a mantissa and one of a fixed set of SI prefixes (3300 -> 3.3 k) and
joined back together on submit.
"""
import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

# Exponent -> symbol, largest first
SI_PREFIXES = (
    (6, 'M'),
    (3, 'k'),
    (0, ''),
    (-3, 'm'),
    (-6, 'µ'),
)
SI_PREFIX_SYMBOLS = dict(SI_PREFIXES)

DEFAULT_MANTISSA_RANGE = (1.0, 1000.0)

# Sentinel for "option not passed", None is a valid unit
UNSET = object()


def _shift(value, places: int) -> float:
    """Multiply value by 10**places, shifting the decimal digits instead of
    multiplying by an inexact binary power of ten."""
    if places == 0:
        return float(value)
    return float(Decimal(repr(float(value))).scaleb(places))


def scale_value(value, magnitude: int) -> float:
    """Return the mantissa of value for the prefix exponent magnitude."""
    return _shift(value, -magnitude)


def unscale_value(mantissa, magnitude: int) -> float:
    """Inverse of scale_value."""
    return _shift(mantissa, magnitude)


@dataclass(frozen=True)
class SIValue:
    value: float
    prefix_magnitude: int = 0

    @property
    def prefix(self) -> str:
        return SI_PREFIX_SYMBOLS[self.prefix_magnitude]


class SIFormatter:
    """
    Chooses the SI prefix used to display a value.

    The largest prefix whose mantissa lands in [lower, upper) wins. Zero,
    non-finite values and values no prefix can fit keep exponent 0.
    """

    def __init__(self, lower: float = DEFAULT_MANTISSA_RANGE[0],
                 upper: float = DEFAULT_MANTISSA_RANGE[1]):
        if lower <= 0 or upper <= lower:
            raise ImproperlyConfigured(
                f"Invalid SI mantissa range [{lower}, {upper})"
            )
        self.lower = lower
        self.upper = upper

    @classmethod
    def from_settings(cls) -> 'SIFormatter':
        """Build a formatter from settings.SI_PREFIX_MANTISSA_RANGE."""
        bounds = getattr(settings, 'SI_PREFIX_MANTISSA_RANGE', DEFAULT_MANTISSA_RANGE)
        try:
            lower, upper = (float(b) for b in bounds)
        except (TypeError, ValueError) as e:
            raise ImproperlyConfigured(
                f"SI_PREFIX_MANTISSA_RANGE must be a (lower, upper) pair, got {bounds!r}"
            ) from e
        return cls(lower, upper)

    def convert_value(self, value) -> SIValue:
        value = float(value)
        if value == 0 or not math.isfinite(value):
            return SIValue(value, 0)

        for magnitude, _symbol in SI_PREFIXES:
            mantissa = scale_value(value, magnitude)
            if self.lower <= abs(mantissa) < self.upper:
                return SIValue(mantissa, magnitude)

        logger.debug(f"No SI prefix fits {value!r}, keeping it unscaled")
        return SIValue(value, 0)

    def format(self, value, unit: str = '', decimals: int = 2) -> str:
        """Render value as e.g. '3.3 kΩ', trailing zeros trimmed."""
        converted = self.convert_value(value)
        number = f"{converted.value:.{decimals}f}"
        if '.' in number:
            number = number.rstrip('0').rstrip('.')
        return f"{number} {converted.prefix}{unit}".rstrip()


@dataclass(frozen=True)
class SIUnitConfig:
    """
    Resolved options of an SI value field.
    """
    unit: Optional[str] = None
    show_prefix: bool = False
    is_integer: bool = False
    min_value: Optional[float] = 0
    max_value: Optional[float] = None
    step: Union[int, str] = 'any'
    html5: bool = True

    @classmethod
    def resolve(cls, measurement_unit=None, *, unit=UNSET, show_prefix=None,
                is_integer=None, min_value=0, max_value=None, step=None,
                html5=True) -> 'SIUnitConfig':
        """
        Derive the field options from a measurement unit, explicit options
        taking precedence. Without a unit the caller has to pass `unit`
        (None is fine).
        """
        if measurement_unit is not None:
            if unit is UNSET:
                unit = measurement_unit.unit
            if show_prefix is None:
                show_prefix = measurement_unit.use_si_prefix
            if is_integer is None:
                is_integer = measurement_unit.is_integer
        elif unit is UNSET:
            raise ImproperlyConfigured(
                "SI unit fields need a measurement unit or an explicit 'unit' option"
            )

        is_integer = bool(is_integer)
        if step is None:
            step = 1 if is_integer else 'any'

        return cls(
            unit=unit or None,
            show_prefix=bool(show_prefix),
            is_integer=is_integer,
            min_value=min_value,
            max_value=max_value,
            step=step,
            html5=html5,
        )

    def html_attrs(self) -> dict:
        """Number input constraints for the mantissa input."""
        if not self.html5:
            return {}
        attrs = {'step': str(self.step)}
        if self.min_value is not None:
            attrs['min'] = str(self.min_value)
        if self.max_value is not None:
            attrs['max'] = str(self.max_value)
        return attrs


class SIValueError(ValueError):
    """A submitted mantissa or prefix that does not make a finite number.

    `field` names the sub-field at fault, `code` is one of 'invalid',
    'out_of_range' or 'invalid_prefix'.
    """

    def __init__(self, raw, field='value', code='invalid'):
        self.raw = raw
        self.field = field
        self.code = code
        super().__init__(f"{raw!r} is not a valid {field} ({code})")


def to_view(value, config: SIUnitConfig, formatter: Optional[SIFormatter] = None) -> dict:
    """
    Split a model value into the sub-field values {'value', 'prefix'}.
    The prefix key is only present when the field shows a prefix selector.
    """
    if not config.show_prefix:
        return {'value': value}
    if value is None:
        return {'value': None, 'prefix': 0}

    converted = (formatter or SIFormatter.from_settings()).convert_value(value)
    return {'value': converted.value, 'prefix': converted.prefix_magnitude}


def from_view(data: dict, config: SIUnitConfig) -> Optional[float]:
    """
    Join submitted sub-field values back into one model value.
    """
    raw = data.get('value')
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None

    try:
        mantissa = float(raw)
    except (TypeError, ValueError):
        raise SIValueError(raw) from None
    if not math.isfinite(mantissa):
        raise SIValueError(raw)

    if not config.show_prefix:
        return mantissa

    # No selection means no scaling
    prefix = data.get('prefix') or 0
    try:
        magnitude = int(prefix)
    except (TypeError, ValueError):
        raise SIValueError(prefix, field='prefix', code='invalid_prefix') from None
    if magnitude not in SI_PREFIX_SYMBOLS:
        raise SIValueError(prefix, field='prefix', code='invalid_prefix')

    value = unscale_value(mantissa, magnitude)
    if not math.isfinite(value):
        raise SIValueError(raw, code='out_of_range')
    return value
