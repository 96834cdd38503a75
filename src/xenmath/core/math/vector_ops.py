"""
Vector Ops — Операции над последовательностями чисел

Простые утилиты над обычными числовыми последовательностями (list, tuple,
монзо): покомпонентное равенство, скалярное произведение, нормы,
биномиальные коэффициенты.
"""

import math
import threading
from collections.abc import Sequence
from typing import Any, Literal

from xenmath.core.errors import InvalidInput
from xenmath.core.math.numerical_safeguards import Number, require_integer

NormKind = Literal["euclidean", "taxicab", "maximum"]


def arrays_equal(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """
    Покомпонентное равенство двух последовательностей.

    Examples:
        >>> arrays_equal([1, 2], (1, 2))
        True
        >>> arrays_equal([1, 2], [1, 2, 0])
        False
    """
    if a is b:
        return True
    if len(a) != len(b):
        return False
    return all(x == y for x, y in zip(a, b))


def dot(a: Sequence[Number], b: Sequence[Number]) -> Number:
    """
    Скалярное произведение; более длинная последовательность усекается.

    Examples:
        >>> dot([1, 2, 3], [4, 5])
        14
    """
    return sum((x * y for x, y in zip(a, b)), 0)


def norm(array: Sequence[Number], kind: NormKind = "euclidean") -> float:
    """
    Норма вектора.

    Args:
        array: Компоненты вектора
        kind: 'euclidean' (L2), 'taxicab' (L1) или 'maximum' (L∞)

    Raises:
        InvalidInput: Если kind неизвестен

    Examples:
        >>> norm([3, -4])
        5.0
        >>> norm([3, -4], "taxicab")
        7
        >>> norm([3, -4], "maximum")
        4
    """
    if kind == "euclidean":
        return math.sqrt(sum(x * x for x in array))
    if kind == "taxicab":
        return sum(abs(x) for x in array)
    if kind == "maximum":
        return max((abs(x) for x in array), default=0)
    raise InvalidInput(f"Unknown norm kind {kind!r}")


# =============================================================================
# BINOMIAL
# =============================================================================

# Треугольник Паскаля, достраивается по требованию (append-only)
_BINOMIALS: list[list[int]] = [
    [1],
    [1, 1],
    [1, 2, 1],
    [1, 3, 3, 1],
    [1, 4, 6, 4, 1],
]
_BINOMIALS_LOCK = threading.Lock()


def binomial(n: int, k: int) -> int:
    """
    Биномиальный коэффициент C(n, k).

    Returns:
        Количество способов выбрать k элементов из n; 0 вне 0 <= k <= n

    Raises:
        InvalidInput: Если n < 0

    Examples:
        >>> binomial(5, 2)
        10
        >>> binomial(5, 7)
        0
    """
    n = require_integer(n, "n")
    k = require_integer(k, "k")
    if n < 0:
        raise InvalidInput(f"binomial: n must be non-negative, got {n}")
    if k < 0 or k > n:
        return 0

    if n >= len(_BINOMIALS):
        with _BINOMIALS_LOCK:
            while n >= len(_BINOMIALS):
                last_row = _BINOMIALS[-1]
                next_row = [1]
                next_row.extend(last_row[i - 1] + last_row[i] for i in range(1, len(last_row)))
                next_row.append(1)
                _BINOMIALS.append(next_row)

    return _BINOMIALS[n][k]
