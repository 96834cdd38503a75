"""
Core math modules для xenmath

Целочисленная теория чисел, простые числа и утилиты над последовательностями.

Модули, работающие с Fraction (monzo, approximation, conversion),
импортируются напрямую: они зависят от xenmath.core.domain.
"""

# Numerical Safeguards
from xenmath.core.math.numerical_safeguards import (
    Number,
    clamp,
    is_valid_float,
    require_finite,
    require_integer,
    validate_non_negative,
    validate_positive,
)

# Number Theory
from xenmath.core.math.number_theory import (
    ExtendedEuclidResult,
    extended_euclid,
    floor_div,
    gcd,
    iterated_euclid,
    lcm,
    mmod,
)

# Primes
from xenmath.core.math.primes import (
    PrimeBasis,
    default_prime_basis,
    is_prime,
    nth_prime,
    prime_factors,
    prime_limit,
    prime_range,
    resolve_prime_basis,
    primes_up_to,
)

# Periodic
from xenmath.core.math.periodic import circular_difference, circular_distance

# Vector Ops
from xenmath.core.math.vector_ops import arrays_equal, binomial, dot, norm

# Combinations
from xenmath.core.math.combinations import combinations, k_combinations

__all__ = [
    # Numerical Safeguards
    "Number",
    "clamp",
    "is_valid_float",
    "require_finite",
    "require_integer",
    "validate_non_negative",
    "validate_positive",
    # Number Theory: Types
    "ExtendedEuclidResult",
    # Number Theory: Functions
    "extended_euclid",
    "floor_div",
    "gcd",
    "iterated_euclid",
    "lcm",
    "mmod",
    # Primes: Types
    "PrimeBasis",
    # Primes: Functions
    "default_prime_basis",
    "is_prime",
    "nth_prime",
    "prime_factors",
    "prime_limit",
    "prime_range",
    "resolve_prime_basis",
    "primes_up_to",
    # Periodic
    "circular_difference",
    "circular_distance",
    # Vector Ops
    "arrays_equal",
    "binomial",
    "dot",
    "norm",
    # Combinations
    "combinations",
    "k_combinations",
]
