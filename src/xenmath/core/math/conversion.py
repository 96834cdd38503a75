"""
Conversion — Центы и частотные отношения

    cents = 1200 * log2(ratio)
    ratio = 2 ** (cents / 1200)
"""

import math
from typing import Final

from xenmath.core.domain.fraction import Fraction
from xenmath.core.math.numerical_safeguards import Number, require_finite, validate_positive

CENTS_PER_OCTAVE: Final[float] = 1200.0


def value_to_cents(value: Number | Fraction) -> float:
    """
    Размер отношения в центах.

    Raises:
        InvalidInput: Если value <= 0 или NaN/Inf

    Examples:
        >>> value_to_cents(2.0)
        1200.0
    """
    if isinstance(value, Fraction):
        return fraction_to_cents(value)

    validate_positive(value, "value")
    return CENTS_PER_OCTAVE * math.log2(value)


def cents_to_value(cents: Number) -> float:
    """
    Отношение, соответствующее размеру в центах.

    Examples:
        >>> cents_to_value(1200.0)
        2.0
    """
    require_finite(cents, "cents")
    return 2.0 ** (cents / CENTS_PER_OCTAVE)


def fraction_to_cents(fraction: Fraction) -> float:
    """
    Размер дроби в центах.

    Логарифм числителя и знаменателя берётся раздельно, поэтому
    дроби вне диапазона float не теряют точность.

    Raises:
        InvalidInput: Если fraction <= 0
    """
    validate_positive(fraction.numerator, "fraction numerator")
    return CENTS_PER_OCTAVE * (math.log2(fraction.numerator) - math.log2(fraction.denominator))
