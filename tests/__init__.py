"""
Test suite for lendmath

Contains:
- tests/unit/          : Unit tests for the math kernel, domain models and contracts
"""
