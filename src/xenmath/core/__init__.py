"""
Core arithmetic primitives, domain values and invariants.

Everything here is pure computation with no I/O.
"""
