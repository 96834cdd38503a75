"""
xenmath — точная рациональная арифметика и теория чисел для микротональной музыки.

Публичный API собран здесь; модули доступны также напрямую через xenmath.core.
"""

from xenmath.core.config import (
    DEFAULT_LIMITS,
    EQUAVE_CENTS_DEFAULT,
    MAX_BIT_LENGTH_DEFAULT,
    ArithmeticLimits,
)
from xenmath.core.domain import Fraction, FractionLike, FractionSet
from xenmath.core.errors import (
    DegenerateEuclidInput,
    DivisionByZero,
    InvalidInput,
    NoApproximationFound,
    Overflow,
    UnrepresentableValue,
    XenMathError,
)
from xenmath.core.math import (
    ExtendedEuclidResult,
    PrimeBasis,
    arrays_equal,
    binomial,
    circular_difference,
    circular_distance,
    clamp,
    combinations,
    default_prime_basis,
    dot,
    extended_euclid,
    floor_div,
    gcd,
    is_prime,
    iterated_euclid,
    k_combinations,
    lcm,
    mmod,
    norm,
    nth_prime,
    prime_factors,
    prime_limit,
    prime_range,
    primes_up_to,
)
from xenmath.core.math.approximation import (
    best_approximation,
    continued_fraction,
    convergents,
    semiconvergents,
)
from xenmath.core.math.conversion import cents_to_value, fraction_to_cents, value_to_cents
from xenmath.core.math.monzo import (
    Monzo,
    add_monzos,
    from_monzo,
    monzo_to_integer,
    monzos_equal,
    scale_monzo,
    sub_monzos,
    to_monzo,
    to_monzo_and_residual,
    trim_monzo,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "ArithmeticLimits",
    "DEFAULT_LIMITS",
    "EQUAVE_CENTS_DEFAULT",
    "MAX_BIT_LENGTH_DEFAULT",
    # Errors
    "DegenerateEuclidInput",
    "DivisionByZero",
    "InvalidInput",
    "NoApproximationFound",
    "Overflow",
    "UnrepresentableValue",
    "XenMathError",
    # Domain
    "Fraction",
    "FractionLike",
    "FractionSet",
    # Number Theory
    "ExtendedEuclidResult",
    "extended_euclid",
    "floor_div",
    "gcd",
    "iterated_euclid",
    "lcm",
    "mmod",
    # Primes
    "PrimeBasis",
    "default_prime_basis",
    "is_prime",
    "nth_prime",
    "prime_factors",
    "prime_limit",
    "prime_range",
    "primes_up_to",
    # Monzo
    "Monzo",
    "add_monzos",
    "from_monzo",
    "monzo_to_integer",
    "monzos_equal",
    "scale_monzo",
    "sub_monzos",
    "to_monzo",
    "to_monzo_and_residual",
    "trim_monzo",
    # Approximation
    "best_approximation",
    "continued_fraction",
    "convergents",
    "semiconvergents",
    # Periodic
    "circular_difference",
    "circular_distance",
    # Conversion
    "cents_to_value",
    "fraction_to_cents",
    "value_to_cents",
    # Vector Ops
    "arrays_equal",
    "binomial",
    "clamp",
    "dot",
    "norm",
    # Combinations
    "combinations",
    "k_combinations",
]
