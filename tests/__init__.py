"""
Test suite for xenmath

Contains:
- tests/unit/          : Unit tests for individual modules
"""
