"""
Monzo — Векторы показателей простых множителей

Монзо — вектор целых показателей, где индекс i соответствует i-му простому
базиса (2, 3, 5, 7, ...). Значение монзо: ∏ prime_i ** exponent_i.

    3/2   → [-1, 1]
    5/4   → [-2, 0, 1]
    81/80 → [-4, 4, -1]

Модуль содержит:
- to_monzo / to_monzo_and_residual: Fraction → монзо
- from_monzo / monzo_to_integer: монзо → значение
- Векторные операции: add_monzos, sub_monzos, scale_monzo, monzos_equal, trim_monzo

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Множитель вне базиса → UnrepresentableValue (никогда не молчаливое усечение)
2. from_monzo(to_monzo(v, limit)) == v для smooth значений
3. Разрядность реконструкции проверяется до вычисления → Overflow
4. Более короткие векторы дополняются нулями
"""

import logging
from collections.abc import Iterable, Sequence
from itertools import zip_longest

from xenmath.core.config import DEFAULT_LIMITS, ArithmeticLimits
from xenmath.core.domain.fraction import Fraction, FractionLike
from xenmath.core.errors import InvalidInput, UnrepresentableValue
from xenmath.core.math.numerical_safeguards import require_integer, validate_non_negative
from xenmath.core.math.primes import PrimeBasis, resolve_prime_basis

logger = logging.getLogger(__name__)

Monzo = list[int]


# =============================================================================
# FRACTION → MONZO
# =============================================================================


def _factor_into(
    value: int,
    sign: int,
    exponents: Monzo,
    primes: Sequence[int],
) -> int:
    """
    Деление value на простые базиса с накоплением показателей.

    Returns:
        Нефакторизованный остаток value
    """
    remaining = value
    for index, prime in enumerate(primes):
        if remaining == 1:
            break
        while remaining % prime == 0:
            remaining //= prime
            exponents[index] += sign
    return remaining


def to_monzo_and_residual(
    value: FractionLike,
    basis_limit: int,
    basis: PrimeBasis | None = None,
) -> tuple[Monzo, Fraction]:
    """
    Разложение значения по первым basis_limit простым с остатком.

    Args:
        value: Положительное fraction-like значение
        basis_limit: Количество простых в базисе
        basis: Кэш простых (default: общий)

    Returns:
        (monzo, residual): монзо длины basis_limit и нефакторизованная часть
        такие, что value == from_monzo(monzo) * residual

    Raises:
        InvalidInput: Если value <= 0 или basis_limit < 0

    Examples:
        >>> to_monzo_and_residual(Fraction(21, 2), 2)
        ([-1, 1], Fraction(7, 1))
    """
    fraction = value if isinstance(value, Fraction) else Fraction(value)
    if fraction.numerator <= 0:
        raise InvalidInput(f"Monzo is defined for positive values, got {fraction}")

    basis_limit = require_integer(basis_limit, "basis_limit")
    validate_non_negative(basis_limit, "basis_limit")

    primes = resolve_prime_basis(basis).primes(basis_limit)
    exponents = [0] * basis_limit

    residual_numerator = _factor_into(fraction.numerator, 1, exponents, primes)
    residual_denominator = _factor_into(fraction.denominator, -1, exponents, primes)

    return exponents, Fraction(residual_numerator, residual_denominator)


def to_monzo(
    value: FractionLike,
    basis_limit: int | None = None,
    basis: PrimeBasis | None = None,
) -> Monzo:
    """
    Монзо значения по первым basis_limit простым.

    Числитель и знаменатель факторизуются независимо, показатели
    знаменателя берутся со знаком минус.

    Args:
        value: Положительное fraction-like значение
        basis_limit: Количество простых в базисе. None — минимальная длина,
            достаточная для наибольшего простого множителя
        basis: Кэш простых (default: общий)

    Returns:
        Монзо длины basis_limit

    Raises:
        InvalidInput: Если value <= 0
        UnrepresentableValue: Если у значения есть простой множитель вне базиса

    Examples:
        >>> to_monzo(Fraction(3, 2), 2)
        [-1, 1]
        >>> to_monzo(Fraction(7, 4))
        [-2, 0, 0, 1]
    """
    fraction = value if isinstance(value, Fraction) else Fraction(value)
    resolved = resolve_prime_basis(basis)

    if basis_limit is None:
        if fraction.numerator <= 0:
            raise InvalidInput(f"Monzo is defined for positive values, got {fraction}")
        factors = {
            **resolved.prime_factors(fraction.numerator),
            **resolved.prime_factors(fraction.denominator),
        }
        basis_limit = resolved.index_of(max(factors)) + 1 if factors else 0

    monzo, residual = to_monzo_and_residual(fraction, basis_limit, basis=resolved)

    if not residual.is_unity():
        raise UnrepresentableValue(
            f"{fraction} is not {basis_limit}-prime-smooth: "
            f"residual {residual} remains outside the basis"
        )

    return monzo


# =============================================================================
# MONZO → FRACTION
# =============================================================================


def from_monzo(
    vector: Iterable[int],
    basis: PrimeBasis | None = None,
    limits: ArithmeticLimits | None = None,
) -> Fraction:
    """
    Реконструкция значения из монзо.

    Положительные показатели формируют числитель, отрицательные — знаменатель.

    Args:
        vector: Показатели простых
        basis: Кэш простых (default: общий)
        limits: Лимиты разрядности (default: DEFAULT_LIMITS)

    Returns:
        ∏ prime_i ** exponent_i как Fraction

    Raises:
        InvalidInput: Если показатель не целый
        Overflow: Если оценка разрядности превышает max_bit_length

    Examples:
        >>> from_monzo([-1, 1])
        Fraction(3, 2)
    """
    exponents = [require_integer(e, "exponent") for e in vector]
    primes = resolve_prime_basis(basis).primes(len(exponents))
    limits = limits or DEFAULT_LIMITS

    numerator_bits = sum(p.bit_length() * e for p, e in zip(primes, exponents) if e > 0)
    denominator_bits = sum(p.bit_length() * -e for p, e in zip(primes, exponents) if e < 0)
    bits = max(numerator_bits, denominator_bits)
    if bits > limits.max_bit_length:
        logger.debug("Monzo reconstruction rejected: ~%d bits for %s", bits, exponents)
    limits.check_bit_length(bits, "Monzo reconstruction")

    numerator = 1
    denominator = 1
    for prime, exponent in zip(primes, exponents):
        if exponent > 0:
            numerator *= prime**exponent
        elif exponent < 0:
            denominator *= prime**-exponent

    return Fraction(numerator, denominator)


def monzo_to_integer(
    vector: Iterable[int],
    basis: PrimeBasis | None = None,
    limits: ArithmeticLimits | None = None,
) -> int:
    """
    Целое значение монзо с неотрицательными показателями.

    Raises:
        InvalidInput: Если есть отрицательный показатель
    """
    exponents = list(vector)
    for exponent in exponents:
        if require_integer(exponent, "exponent") < 0:
            raise InvalidInput(f"Monzo {exponents} has negative exponents, not an integer")
    return from_monzo(exponents, basis=basis, limits=limits).numerator


# =============================================================================
# ВЕКТОРНЫЕ ОПЕРАЦИИ
# =============================================================================


def add_monzos(a: Sequence[int], b: Sequence[int]) -> Monzo:
    """Сумма монзо (произведение значений)."""
    return [x + y for x, y in zip_longest(a, b, fillvalue=0)]


def sub_monzos(a: Sequence[int], b: Sequence[int]) -> Monzo:
    """Разность монзо (частное значений)."""
    return [x - y for x, y in zip_longest(a, b, fillvalue=0)]


def scale_monzo(vector: Sequence[int], amount: int) -> Monzo:
    """Умножение монзо на целое (возведение значения в степень)."""
    amount = require_integer(amount, "amount")
    return [amount * e for e in vector]


def monzos_equal(a: Sequence[int], b: Sequence[int]) -> bool:
    """Равенство монзо с дополнением нулями: [1, 0] == [1]."""
    return all(x == y for x, y in zip_longest(a, b, fillvalue=0))


def trim_monzo(vector: Sequence[int]) -> Monzo:
    """Удаление хвостовых нулей."""
    trimmed = list(vector)
    while trimmed and trimmed[-1] == 0:
        trimmed.pop()
    return trimmed
