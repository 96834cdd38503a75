"""
Periodic — Расстояние на окружности с периодом (эквава)

Высоты, отличающиеся на целое число периодов, эквивалентны. Разность
считается по кратчайшей дуге окружности длины period.

ФОРМУЛЫ:
    circular_difference(a, b, P) = mmod(a - b + P/2, P) - P/2
    circular_distance(a, b, P)   = |circular_difference(a, b, P)|

Результат circular_difference лежит в [-P/2, P/2), расстояние — в [0, P/2].
"""

from xenmath.core.config import EQUAVE_CENTS_DEFAULT
from xenmath.core.math.number_theory import mmod
from xenmath.core.math.numerical_safeguards import Number


def circular_difference(a: Number, b: Number, period: Number = EQUAVE_CENTS_DEFAULT) -> Number:
    """
    Знаковое кратчайшее смещение от b к a на окружности длины period.

    Args:
        a: Первая высота (например, в центах)
        b: Вторая высота
        period: Период эквивалентности (default: 1200 центов)

    Returns:
        a - b, приведённое в [-period/2, period/2)

    Raises:
        DivisionByZero: Если period == 0
        InvalidInput: Если аргументы NaN/Inf

    Examples:
        >>> circular_difference(1150, 50, 1200)
        -100.0
        >>> circular_difference(50, 1150, 1200)
        100.0
    """
    half = 0.5 * period
    return mmod(a - b + half, period) - half


def circular_distance(a: Number, b: Number, period: Number = EQUAVE_CENTS_DEFAULT) -> Number:
    """
    Расстояние между высотами с учётом эквивалентности по периоду.

    Examples:
        >>> circular_distance(1150, 50, 1200)
        100.0
    """
    return abs(circular_difference(a, b, period))
