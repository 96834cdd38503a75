"""
Primes — Базис простых чисел и факторизация

Модуль содержит:
- PrimeBasis: явный кэш возрастающей последовательности простых 2, 3, 5, 7, ...
- Функции-обёртки nth_prime / is_prime / primes_up_to / prime_range /
  prime_factors / prime_limit с опциональным аргументом basis

Кэш append-only: уже вычисленные элементы никогда не переписываются.
Расширение выполняется под threading.Lock на копии списка, после чего
ссылка на новый список публикуется атомарным присваиванием. Поэтому
чтение уже вычисленного префикса не требует синхронизации.

Общий экземпляр для всего процесса доступен через default_prime_basis();
любой вызывающий код может передать собственный PrimeBasis явно.
"""

import bisect
import logging
import math
import threading
from collections.abc import Iterator
from typing import Final

from xenmath.core.config import PRIME_BASIS_SEED_SIZE
from xenmath.core.errors import InvalidInput
from xenmath.core.math.numerical_safeguards import require_integer, validate_non_negative

logger = logging.getLogger(__name__)

# Начальный префикс базиса (первые простые)
_SEED_PRIMES: Final[tuple[int, ...]] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)


# =============================================================================
# PRIME BASIS
# =============================================================================


class PrimeBasis:
    """
    Лениво расширяемый кэш простых чисел.

    Индексация 0-based: nth_prime(0) == 2, nth_prime(1) == 3.
    """

    def __init__(self, seed_size: int = PRIME_BASIS_SEED_SIZE):
        """
        Args:
            seed_size: Сколько простых вычислить сразу при создании
        """
        validate_non_negative(seed_size, "seed_size")

        self._primes: list[int] = list(_SEED_PRIMES)
        self._lock = threading.Lock()
        self._extend_to_count(seed_size)

    def __len__(self) -> int:
        """Количество уже вычисленных простых."""
        return len(self._primes)

    def __repr__(self) -> str:
        return f"PrimeBasis(cached={len(self._primes)}, largest={self._primes[-1]})"

    # -------------------------------------------------------------------------
    # Расширение кэша
    # -------------------------------------------------------------------------

    def _extend_to_count(self, count: int) -> None:
        """Гарантирует, что в кэше не меньше count простых."""
        if count <= len(self._primes):
            return

        with self._lock:
            primes = self._primes
            # Другой поток мог расширить кэш, пока мы ждали lock
            if count <= len(primes):
                return

            extended = list(primes)
            candidate = extended[-1] + 2
            while len(extended) < count:
                if _is_prime_against(candidate, extended):
                    extended.append(candidate)
                candidate += 2

            logger.debug("Prime basis extended from %d to %d primes", len(primes), len(extended))
            self._primes = extended

    def _extend_past(self, limit: int) -> None:
        """Гарантирует, что наибольшее простое в кэше >= limit."""
        if self._primes[-1] >= limit:
            return

        with self._lock:
            primes = self._primes
            if primes[-1] >= limit:
                return

            extended = list(primes)
            candidate = extended[-1] + 2
            while extended[-1] < limit:
                if _is_prime_against(candidate, extended):
                    extended.append(candidate)
                candidate += 2

            logger.debug(
                "Prime basis extended past %d: %d -> %d primes", limit, len(primes), len(extended)
            )
            self._primes = extended

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    def nth_prime(self, index: int) -> int:
        """
        Простое число с индексом index (0-based).

        Raises:
            InvalidInput: Если index < 0 или не целое
        """
        index = require_integer(index, "index")
        validate_non_negative(index, "index")

        self._extend_to_count(index + 1)
        return self._primes[index]

    def primes(self, count: int) -> tuple[int, ...]:
        """Первые count простых."""
        count = require_integer(count, "count")
        validate_non_negative(count, "count")

        self._extend_to_count(count)
        return tuple(self._primes[:count])

    def primes_up_to(self, limit: int) -> tuple[int, ...]:
        """Все простые p <= limit."""
        limit = require_integer(limit, "limit")
        if limit < 2:
            return ()

        self._extend_past(limit)
        primes = self._primes
        return tuple(primes[: bisect.bisect_right(primes, limit)])

    def iter_primes(self) -> Iterator[int]:
        """Бесконечный итератор по базису с ленивым расширением."""
        index = 0
        while True:
            primes = self._primes
            if index >= len(primes):
                self._extend_to_count(2 * len(primes))
                continue
            yield primes[index]
            index += 1

    def index_of(self, prime: int) -> int:
        """
        Индекс простого числа в базисе.

        Raises:
            InvalidInput: Если prime не является простым
        """
        if not self.is_prime(prime):
            raise InvalidInput(f"{prime} is not a prime")

        self._extend_past(prime)
        return bisect.bisect_left(self._primes, prime)

    # -------------------------------------------------------------------------
    # Тесты простоты и факторизация
    # -------------------------------------------------------------------------

    def is_prime(self, n: int) -> bool:
        """Проверка простоты пробным делением на простые базиса до √n."""
        n = require_integer(n, "n")
        if n < 2:
            return False

        primes = self._primes
        if n <= primes[-1]:
            index = bisect.bisect_left(primes, n)
            return primes[index] == n

        root = math.isqrt(n)
        for prime in self.iter_primes():
            if prime > root:
                return True
            if n % prime == 0:
                return False

    def prime_factors(self, n: int) -> dict[int, int]:
        """
        Факторизация положительного целого пробным делением.

        Args:
            n: Положительное целое

        Returns:
            Словарь {простое: показатель} в порядке возрастания простых;
            для n == 1 — пустой словарь

        Raises:
            InvalidInput: Если n <= 0 или не целое

        Examples:
            >>> PrimeBasis().prime_factors(360)
            {2: 3, 3: 2, 5: 1}
        """
        n = require_integer(n, "n")
        if n <= 0:
            raise InvalidInput(f"Cannot factor non-positive integer {n}")

        factors: dict[int, int] = {}
        remaining = n

        for prime in self.iter_primes():
            if prime * prime > remaining:
                break
            exponent = 0
            while remaining % prime == 0:
                remaining //= prime
                exponent += 1
            if exponent:
                factors[prime] = exponent

        if remaining > 1:
            # Остаток после деления до √remaining прост
            factors[remaining] = 1

        return factors


def _is_prime_against(candidate: int, primes: list[int]) -> bool:
    """Пробное деление нечётного candidate на уже известные простые."""
    root = math.isqrt(candidate)
    for prime in primes:
        if prime > root:
            return True
        if candidate % prime == 0:
            return False
    return True


# =============================================================================
# ОБЩИЙ ЭКЗЕМПЛЯР
# =============================================================================

_DEFAULT_BASIS = PrimeBasis()


def default_prime_basis() -> PrimeBasis:
    """Общий для процесса экземпляр PrimeBasis."""
    return _DEFAULT_BASIS


def resolve_prime_basis(basis: PrimeBasis | None) -> PrimeBasis:
    """Явно переданный базис или общий экземпляр, если basis is None."""
    return _DEFAULT_BASIS if basis is None else basis


# =============================================================================
# ФУНКЦИИ-ОБЁРТКИ
# =============================================================================


def nth_prime(index: int, basis: PrimeBasis | None = None) -> int:
    """
    Простое число с индексом index (0-based).

    Examples:
        >>> nth_prime(0)
        2
        >>> nth_prime(4)
        11
    """
    return resolve_prime_basis(basis).nth_prime(index)


def is_prime(n: int, basis: PrimeBasis | None = None) -> bool:
    """Проверка простоты."""
    return resolve_prime_basis(basis).is_prime(n)


def primes_up_to(limit: int, basis: PrimeBasis | None = None) -> tuple[int, ...]:
    """Все простые p <= limit."""
    return resolve_prime_basis(basis).primes_up_to(limit)


def prime_range(start: int, end: int, basis: PrimeBasis | None = None) -> tuple[int, ...]:
    """
    Простые p в полуинтервале [start, end).

    Examples:
        >>> prime_range(10, 30)
        (11, 13, 17, 19, 23, 29)
    """
    start = require_integer(start, "start")
    end = require_integer(end, "end")
    return tuple(p for p in resolve_prime_basis(basis).primes_up_to(end - 1) if p >= start)


def prime_factors(n: int, basis: PrimeBasis | None = None) -> dict[int, int]:
    """
    Факторизация положительного целого.

    Raises:
        InvalidInput: Если n <= 0
    """
    return resolve_prime_basis(basis).prime_factors(n)


def prime_limit(value, basis: PrimeBasis | None = None) -> int:
    """
    Наибольший простой множитель числителя и знаменателя значения.

    Args:
        value: Положительное целое или Fraction-like значение

    Returns:
        Наибольший простой множитель; 1 для единицы

    Raises:
        InvalidInput: Если value <= 0
    """
    # Локальный импорт: domain.fraction импортирует пакет xenmath.core.math
    from xenmath.core.domain.fraction import Fraction

    fraction = value if isinstance(value, Fraction) else Fraction(value)
    if fraction.numerator <= 0:
        raise InvalidInput(f"prime_limit is defined for positive values, got {fraction}")

    resolved = resolve_prime_basis(basis)
    factors = list(resolved.prime_factors(fraction.numerator))
    factors += list(resolved.prime_factors(fraction.denominator))
    return max(factors, default=1)
