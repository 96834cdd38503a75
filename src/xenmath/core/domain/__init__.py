"""
Domain values.

Contains the exact rational number Fraction and its value-keyed set.
"""

from xenmath.core.domain.fraction import Fraction, FractionLike, FractionSet

__all__ = [
    "Fraction",
    "FractionLike",
    "FractionSet",
]
