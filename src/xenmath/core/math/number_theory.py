"""
Number Theory — Целочисленная теория чисел

Фундамент точной арифметики, без зависимостей от остальных модулей:
- floor_div / mmod: деление и остаток с математическим floor (не truncation)
- gcd / lcm
- extended_euclid: итеративный расширенный алгоритм Евклида (коэффициенты Безу)
- iterated_euclid: свёртка extended_euclid по последовательности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. a * coef_a + b * coef_b == gcd и gcd >= 0
2. quotient_a == a // gcd, quotient_b == abs(b // gcd)
3. Вход (0, 0) → DegenerateEuclidInput
4. sum(seq[i] * coef[i]) == gcd(seq) для iterated_euclid

АЛГОРИТМ (extended_euclid):
    (r_old, r) = (a, b);  (s_old, s) = (1, 0);  (t_old, t) = (0, 1)
    пока r != 0:
        q = floor_div(r_old, r)
        (r_old, r) = (r, r_old - q * r)   — аналогично для s и t
    gcd = r_old (знак нормализуется до неотрицательного)
"""

import math
import numbers
from collections.abc import Iterable
from typing import NamedTuple

from xenmath.core.errors import DegenerateEuclidInput, DivisionByZero, Overflow
from xenmath.core.math.numerical_safeguards import (
    Number,
    require_finite,
    require_integer,
)


# =============================================================================
# FLOOR DIVISION & MODULO
# =============================================================================


def floor_div(a: Number, b: Number) -> int:
    """
    Деление с математическим floor: ⌊a / b⌋.

    В отличие от truncation, результат округляется к -∞:
    floor_div(-7, 2) == -4.

    Args:
        a: Делимое
        b: Делитель

    Returns:
        Частное как int

    Raises:
        DivisionByZero: Если b == 0
        InvalidInput: Если a или b NaN/Inf
        Overflow: Если смешанное int/float частное вне диапазона float

    Examples:
        >>> floor_div(7, 2)
        3
        >>> floor_div(-7, 2)
        -4
        >>> floor_div(7.5, 2)
        3
    """
    require_finite(a, "a")
    require_finite(b, "b")

    if b == 0:
        raise DivisionByZero(f"floor_div: division of {a} by zero")

    if isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral):
        return a // b

    try:
        return math.floor(a / b)
    except OverflowError as e:
        raise Overflow("floor_div: mixed int/float quotient is out of float range") from e


def mmod(a: Number, b: Number) -> Number:
    """
    Математический остаток: результат всегда имеет знак делителя.

    Args:
        a: Делимое
        b: Делитель (период)

    Returns:
        a - b * floor(a / b)

    Raises:
        DivisionByZero: Если b == 0
        InvalidInput: Если a или b NaN/Inf

    Examples:
        >>> mmod(-1, 12)
        11
        >>> mmod(13, 12)
        1
        >>> mmod(5, -12)
        -7
    """
    require_finite(a, "a")
    require_finite(b, "b")

    if b == 0:
        raise DivisionByZero(f"mmod: modulo of {a} by zero")

    # Python % уже реализует знак делителя для int и float
    return a % b


def gcd(a: int, b: int) -> int:
    """Наибольший общий делитель (всегда >= 0)."""
    return math.gcd(require_integer(a, "a"), require_integer(b, "b"))


def lcm(a: int, b: int) -> int:
    """Наименьшее общее кратное (всегда >= 0, lcm(0, x) == 0)."""
    return math.lcm(require_integer(a, "a"), require_integer(b, "b"))


# =============================================================================
# EXTENDED EUCLID
# =============================================================================


class ExtendedEuclidResult(NamedTuple):
    """
    Результат расширенного алгоритма Евклида.

    Гарантии:
        a * coef_a + b * coef_b == gcd
        gcd >= 0
        quotient_a == a // gcd
        quotient_b == abs(b // gcd)
    """

    coef_a: int
    coef_b: int
    gcd: int
    quotient_a: int
    quotient_b: int


def extended_euclid(a: int, b: int) -> ExtendedEuclidResult:
    """
    Итеративный расширенный алгоритм Евклида.

    Находит x, y такие, что a * x + b * y == gcd(a, b).

    Отрицательные входы обрабатываются через floor-частные на каждом шаге;
    в конце знак тройки (gcd, coef_a, coef_b) нормализуется так, чтобы
    gcd >= 0.

    Args:
        a: Первое целое
        b: Второе целое

    Returns:
        ExtendedEuclidResult(coef_a, coef_b, gcd, quotient_a, quotient_b)

    Raises:
        InvalidInput: Если a или b NaN/Inf/дробные
        DegenerateEuclidInput: Если a == b == 0

    Examples:
        >>> result = extended_euclid(240, 46)
        >>> result.gcd
        2
        >>> 240 * result.coef_a + 46 * result.coef_b
        2
    """
    a = require_integer(a, "a")
    b = require_integer(b, "b")

    if a == 0 and b == 0:
        raise DegenerateEuclidInput(
            "extended_euclid(0, 0): gcd is 0 and Bézout coefficients are undefined"
        )

    r_old, r = a, b
    s_old, s = 1, 0
    t_old, t = 0, 1

    while r != 0:
        quotient = floor_div(r_old, r)
        r_old, r = r, r_old - quotient * r
        s_old, s = s, s_old - quotient * s
        t_old, t = t, t_old - quotient * t

    # Последний ненулевой остаток имеет знак последнего делителя
    if r_old < 0:
        r_old, s_old, t_old = -r_old, -s_old, -t_old

    return ExtendedEuclidResult(
        coef_a=s_old,
        coef_b=t_old,
        gcd=r_old,
        quotient_a=a // r_old,
        quotient_b=abs(b // r_old),
    )


def iterated_euclid(params: Iterable[int]) -> list[int]:
    """
    Итерированный расширенный алгоритм Евклида.

    Свёртка extended_euclid слева направо: на каждом шаге все ранее
    накопленные коэффициенты умножаются на coef_a пары, а коэффициент
    нового элемента равен coef_b.

    Нулевые элементы, встреченные пока накопленный gcd равен 0, получают
    коэффициент 0. Если накопленный gcd отрицателен (единственный
    отрицательный элемент), все коэффициенты меняют знак.

    Args:
        params: Последовательность целых

    Returns:
        Коэффициенты Безу, по одному на элемент:
        sum(params[i] * coefs[i]) == gcd(params)

    Raises:
        InvalidInput: Если элемент NaN/Inf/дробный
        DegenerateEuclidInput: Если последовательность непуста и все элементы равны 0

    Examples:
        >>> iterated_euclid([6, 10, 15])
        [-14, 7, 1]
        >>> iterated_euclid([])
        []
    """
    coefs: list[int] = []
    a: int | None = None

    for raw in params:
        param = require_integer(raw, "param")

        if a is None:
            a = param
            coefs.append(1)
            continue

        if a == 0 and param == 0:
            coefs.append(0)
            continue

        ee = extended_euclid(a, param)
        for j in range(len(coefs)):
            coefs[j] *= ee.coef_a
        a = ee.gcd
        coefs.append(ee.coef_b)

    if a is None:
        return coefs

    if a == 0:
        raise DegenerateEuclidInput(
            f"iterated_euclid: all {len(coefs)} inputs are zero, "
            f"Bézout coefficients are undefined"
        )

    if a < 0:
        coefs = [-coef for coef in coefs]

    return coefs
