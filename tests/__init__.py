"""
Test suite for floco

Contains:
- tests/unit/        : Unit tests for individual modules
- tests/policies.py  : Validation policies shared by the tests
"""
