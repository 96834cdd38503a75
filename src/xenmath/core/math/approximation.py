"""
Approximation — Цепные дроби и наилучшее рациональное приближение

Модуль содержит:
- continued_fraction: ленивая генерация неполных частных [a0; a1, a2, ...]
- convergents: подходящие дроби p_k / q_k
- semiconvergents: промежуточные дроби между подходящими
- best_approximation: ближайшая дробь в пределах ограничений на числитель и знаменатель

Вход может быть Fraction, int, float или строкой. float обрабатывается по
его точному двоичному значению, поэтому разложение всегда конечно.

РЕКУРРЕНТНОЕ СООТНОШЕНИЕ:
    p_k = a_k * p_{k-1} + p_{k-2},   p_{-1} = 1, p_{-2} = 0
    q_k = a_k * q_{k-1} + q_{k-2},   q_{-1} = 0, q_{-2} = 1

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Подходящие дроби чередуются: выше/ниже цели
2. |convergent_k - x| строго убывает (кроме последнего точного члена)
3. Равноудалённые кандидаты → меньший знаменатель
4. Нет допустимого кандидата → NoApproximationFound
"""

import logging
from collections.abc import Iterator

from xenmath.core.domain.fraction import Fraction, FractionLike
from xenmath.core.errors import NoApproximationFound
from xenmath.core.math.number_theory import floor_div
from xenmath.core.math.numerical_safeguards import require_integer, validate_non_negative

logger = logging.getLogger(__name__)


def _validate_depth(max_depth: int | None) -> int | None:
    if max_depth is None:
        return None
    max_depth = require_integer(max_depth, "max_depth")
    validate_non_negative(max_depth, "max_depth")
    return max_depth


# =============================================================================
# CONTINUED FRACTION
# =============================================================================


def continued_fraction(value: FractionLike, max_depth: int | None = None) -> Iterator[int]:
    """
    Неполные частные цепной дроби значения.

    Каждый шаг: a = floor_div(n, d), затем обращение остатка (n, d) → (d, n - a*d).

    Args:
        value: Целевое значение
        max_depth: Максимальное количество членов (None — до точного нуля)

    Yields:
        Неполные частные a0, a1, a2, ...

    Raises:
        InvalidInput: Если max_depth < 0 или value некорректно

    Examples:
        >>> list(continued_fraction(Fraction(415, 93)))
        [4, 2, 6, 7]
        >>> list(continued_fraction(Fraction(-3, 2)))
        [-2, 2]
    """
    max_depth = _validate_depth(max_depth)
    target = value if isinstance(value, Fraction) else Fraction(value)

    numerator, denominator = target.numerator, target.denominator
    depth = 0
    while denominator != 0 and (max_depth is None or depth < max_depth):
        quotient = floor_div(numerator, denominator)
        yield quotient
        numerator, denominator = denominator, numerator - quotient * denominator
        depth += 1


def convergents(value: FractionLike, max_depth: int | None = None) -> Iterator[Fraction]:
    """
    Подходящие дроби цепной дроби значения.

    Каждый вызов начинает разложение заново.

    Examples:
        >>> [str(c) for c in convergents(Fraction(415, 93))]
        ['4', '9/2', '58/13', '415/93']
    """
    p_prev, p = 0, 1
    q_prev, q = 1, 0
    for term in continued_fraction(value, max_depth):
        p_prev, p = p, term * p + p_prev
        q_prev, q = q, term * q + q_prev
        yield Fraction(p, q)


def semiconvergents(value: FractionLike, max_depth: int | None = None) -> Iterator[Fraction]:
    """
    Промежуточные дроби (p_{k-2} + j p_{k-1}) / (q_{k-2} + j q_{k-1}), 1 <= j <= a_k.

    Каждая серия заканчивается подходящей дробью (j == a_k). Для a0 <= 0
    серия состоит из одной подходящей дроби a0 / 1.

    Examples:
        >>> [str(c) for c in semiconvergents(Fraction(7, 3))]
        ['1', '2', '3', '5/2', '7/3']
    """
    p_prev, p = 0, 1
    q_prev, q = 1, 0
    for index, term in enumerate(continued_fraction(value, max_depth)):
        start = term if index == 0 and term <= 0 else 1
        for j in range(start, term + 1):
            yield Fraction(j * p + p_prev, j * q + q_prev)
        p_prev, p = p, term * p + p_prev
        q_prev, q = q, term * q + q_prev


# =============================================================================
# BEST APPROXIMATION
# =============================================================================


def _closest(candidates: list[Fraction], target: Fraction) -> Fraction:
    """Ближайший к цели кандидат; при равенстве — меньший знаменатель."""
    return min(candidates, key=lambda c: (abs(c - target), c.denominator))


def _largest_step(bound: int | None, base: int, step: int) -> int | None:
    """Наибольшее j с base + j * step <= bound (None — без ограничения)."""
    if bound is None:
        return None
    if step == 0:
        return None if base <= bound else -1
    return (bound - base) // step


def best_approximation(
    value: FractionLike,
    max_numerator: int | None = None,
    max_denominator: int | None = None,
) -> Fraction:
    """
    Наилучшее рациональное приближение в пределах ограничений.

    Обходит подходящие дроби, пока они укладываются в ограничения, затем
    сравнивает последнюю допустимую подходящую дробь с наибольшей
    допустимой промежуточной дробью следующей серии.

    Args:
        value: Целевое значение
        max_numerator: Ограничение |numerator| (None — без ограничения)
        max_denominator: Ограничение denominator (None — без ограничения)

    Returns:
        Ближайшая допустимая дробь; при равенстве расстояний — с меньшим знаменателем

    Raises:
        InvalidInput: Если ограничение отрицательное
        NoApproximationFound: Если ни один кандидат не удовлетворяет ограничениям

    Examples:
        >>> best_approximation(1.5849625, max_denominator=12)
        Fraction(19, 12)
        >>> best_approximation(Fraction(355, 113), max_denominator=100)
        Fraction(311, 99)
    """
    if max_numerator is not None:
        max_numerator = require_integer(max_numerator, "max_numerator")
        validate_non_negative(max_numerator, "max_numerator")
    if max_denominator is not None:
        max_denominator = require_integer(max_denominator, "max_denominator")
        validate_non_negative(max_denominator, "max_denominator")

    target = value if isinstance(value, Fraction) else Fraction(value)
    if target < 0:
        return -best_approximation(-target, max_numerator, max_denominator)

    def admissible(p: int, q: int) -> bool:
        return (max_numerator is None or p <= max_numerator) and (
            max_denominator is None or q <= max_denominator
        )

    p_prev, p = 0, 1
    q_prev, q = 1, 0
    for term in continued_fraction(target):
        p_next = term * p + p_prev
        q_next = term * q + q_prev
        if admissible(p_next, q_next):
            p_prev, p = p, p_next
            q_prev, q = q, q_next
            continue

        candidates = []
        if q > 0:
            candidates.append(Fraction(p, q))

        steps = [
            step
            for step in (
                _largest_step(max_numerator, p_prev, p),
                _largest_step(max_denominator, q_prev, q),
            )
            if step is not None
        ]
        j = min(steps, default=term - 1)
        # В первой серии j = 0 даёт 0/1
        if (j >= 1 or (j == 0 and q == 0)) and j * q + q_prev > 0:
            candidates.append(Fraction(j * p + p_prev, j * q + q_prev))

        if not candidates:
            raise NoApproximationFound(
                f"No fraction near {target} with numerator <= {max_numerator} "
                f"and denominator <= {max_denominator}"
            )

        best = _closest(candidates, target)
        logger.debug(
            "Best approximation of %s within (%s, %s): %s",
            target,
            max_numerator,
            max_denominator,
            best,
        )
        return best

    # Разложение закончилось внутри ограничений: значение представимо точно
    return Fraction(p, q)
