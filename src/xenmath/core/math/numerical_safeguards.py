"""
Numerical Safeguards — Валидация входов точной арифметики

Модуль обеспечивает единообразную проверку аргументов для всех
математических операций xenmath:
- Проверка float на NaN/Inf
- Приведение integer-valued значений к int (3.0 → 3)
- Валидация неотрицательности и положительности
- Ограничение значения диапазоном (clamp)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не проходят валидацию (InvalidInput)
2. Дробные float никогда не округляются молча до int
3. bool не считается целым числом
"""

import math
import numbers
from typing import Union

from xenmath.core.errors import InvalidInput

Number = Union[int, float]


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def require_finite(value: Number, name: str) -> Number:
    """
    Валидация, что значение — конечное действительное число.

    Args:
        value: Проверяемое значение (int или float)
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        InvalidInput: Если value не число, NaN или Inf
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInput(f"{name} must be a real number, got {value!r}")

    if isinstance(value, float) and not is_valid_float(value):
        raise InvalidInput(f"{name} must be finite (not NaN/Inf), got {value}")

    return value


def require_integer(value: Number, name: str) -> int:
    """
    Приведение значения к int с проверкой целочисленности.

    Integer-valued float (например, 4.0) принимается и приводится к int.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Значение как int

    Raises:
        InvalidInput: Если value NaN/Inf, дробное или не число

    Examples:
        >>> require_integer(4, "a")
        4
        >>> require_integer(4.0, "a")
        4
        >>> require_integer(4.5, "a")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        InvalidInput: a must be an integer, got 4.5
    """
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")

    if isinstance(value, numbers.Integral):
        return int(value)

    if isinstance(value, float):
        if not is_valid_float(value):
            raise InvalidInput(f"{name} must be finite (not NaN/Inf), got {value}")
        if value.is_integer():
            return int(value)

    raise InvalidInput(f"{name} must be an integer, got {value!r}")


# =============================================================================
# ВАЛИДАЦИЯ ДИАПАЗОНОВ
# =============================================================================


def validate_non_negative(value: int, name: str) -> None:
    """
    Валидация, что целое значение неотрицательное.

    Raises:
        InvalidInput: Если value < 0
    """
    if value < 0:
        raise InvalidInput(f"{name} must be non-negative, got {value}")


def validate_positive(value: Number, name: str) -> None:
    """
    Валидация, что значение строго положительное и конечное.

    Raises:
        InvalidInput: Если value <= 0 или NaN/Inf
    """
    require_finite(value, name)

    if value <= 0:
        raise InvalidInput(f"{name} must be positive, got {value}")


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp(value, min_value=None, max_value=None):
    """
    Значение, прижатое к отрезку [min_value, max_value].

    Работает с любыми упорядочиваемыми числами, включая Fraction;
    отсутствующая граница не ограничивает.

    Examples:
        >>> clamp(13, 0, 12)
        12
        >>> clamp(-3, min_value=0)
        0
        >>> clamp(Fraction(7, 4), Fraction(1), Fraction(2))
        Fraction(7, 4)
    """
    if min_value is not None and value < min_value:
        return min_value
    if max_value is not None and value > max_value:
        return max_value
    return value
