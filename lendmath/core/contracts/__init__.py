"""
Contract Validation Module

Модуль для валидации JSON конфигурации пулов и долгов перед расчётами.
"""

from .validators import (
    ContractValidator,
    DebtPositionsValidator,
    InterestCurveValidator,
    SchemaLoader,
    load_debts,
    load_kinks,
    validate_debt_positions,
    validate_interest_curve,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "InterestCurveValidator",
    "DebtPositionsValidator",
    # Functions
    "validate_interest_curve",
    "validate_debt_positions",
    "load_kinks",
    "load_debts",
]
