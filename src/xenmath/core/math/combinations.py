"""
Combinations — Перебор подмножеств

Элементы различаются по позиции, а не по значению: k_combinations([1, 1], 1)
возвращает [[1], [1]].
"""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def k_combinations(items: Sequence[T], k: int) -> list[list[T]]:
    """
    Все подмножества размера k в порядке следования элементов.

    Args:
        items: Элементы любого типа
        k: Размер подмножества

    Returns:
        Список подмножеств; [] если k <= 0 или k > len(items)

    Examples:
        >>> k_combinations([1, 2, 3], 2)
        [[1, 2], [1, 3], [2, 3]]
        >>> k_combinations([1, 2, 3], 0)
        []
    """
    if k <= 0 or k > len(items):
        return []

    if k == len(items):
        return [list(items)]

    if k == 1:
        return [[item] for item in items]

    # Каждый элемент i объединяется с (k-1)-подмножествами последующих элементов
    combs: list[list[T]] = []
    for i in range(len(items) - k + 1):
        for tail in k_combinations(items[i + 1 :], k - 1):
            combs.append([items[i], *tail])
    return combs


def combinations(items: Sequence[T]) -> list[list[T]]:
    """
    Все непустые подмножества, упорядоченные по размеру.

    Examples:
        >>> combinations([1, 2, 3])
        [[1], [2], [3], [1, 2], [1, 3], [2, 3], [1, 2, 3]]
    """
    combs: list[list[T]] = []
    for k in range(1, len(items) + 1):
        combs.extend(k_combinations(items, k))
    return combs
