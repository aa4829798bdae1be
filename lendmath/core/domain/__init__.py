"""
Domain models and value objects.

Contains the inputs of the rate calculations (Kink, Debt), the fee tier
table and the decimals conventions of the protocol ledger.
"""

from lendmath.core.domain.fee_tiers import FEE_TIERS, FeeTier, FeeTierIndex, get_fee_tier
from lendmath.core.domain.models import Debt, Kink
from lendmath.core.domain.units import (
    HEALTH_FACTOR_DECIMALS,
    INTEREST_DECIMALS,
    ORACLE_DECIMALS,
    calc_decimal_ratio,
    rescale,
)

__all__ = [
    # Units module
    "ORACLE_DECIMALS",
    "INTEREST_DECIMALS",
    "HEALTH_FACTOR_DECIMALS",
    "rescale",
    "calc_decimal_ratio",
    # Fee tiers
    "FeeTierIndex",
    "FeeTier",
    "FEE_TIERS",
    "get_fee_tier",
    # Rate inputs
    "Kink",
    "Debt",
]
