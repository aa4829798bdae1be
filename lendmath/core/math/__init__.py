"""
Core math modules для lendmath

Целочисленная арифметика фиксированной точки и расчёты протокола поверх неё.
"""

# Numerical Safeguards
from lendmath.core.math.numerical_safeguards import (
    # NaN/Inf sanitization
    is_valid_float,
    sanitize_float,
    # Utilities
    clamp,
    round_to_decimals,
    # Validation
    validate_int,
    validate_non_negative_int,
    validate_positive_int,
)

# Scaled Integers
from lendmath.core.math.scaled import (
    LOG_GUARD_BITS,
    POW_GUARD_DIGITS,
    LogBase,
    RoundingMode,
    clamp_int,
    div_round,
    div_scaled,
    frac_bits_for,
    from_scaled,
    log2_scaled,
    log_base_scaled,
    mul_div_round,
    mul_scaled,
    pow10,
    pow_int_scaled,
    precompute_log_base,
    round_int_by_step,
    to_big_int,
    to_scaled,
)

# Two's Complement
from lendmath.core.math.twos_complement import (
    to_int32,
    to_int64,
    to_signed_n,
    to_unsigned_int32,
    to_unsigned_int64,
    to_unsigned_n,
)

# Sqrt Price
from lendmath.core.math.sqrt_price import (
    big_price_from_sqrt,
    big_price_from_sqrt_q64,
    big_price_from_sqrt_q96,
    price_from_sqrt_x64,
    price_from_sqrt_x64_with_ratio,
)

# Tick ↔ Price
from lendmath.core.math.tick_price import (
    DEFAULT_TICK_SCALE,
    TICK_BASE,
    price_to_tick,
    round_tick_to_spacing,
    tick_from_chain,
    tick_log_base,
    tick_to_price,
)

# Leverage
from lendmath.core.math.leverage import (
    calc_leverage,
    calc_max_withdrawable,
    decrease_by_leverage,
    increase_by_leverage,
    ltv_to_leverage,
)

# Interest Rate
from lendmath.core.math.interest_rate import (
    SECONDS_PER_YEAR,
    calc_interest_for_time,
    calc_piecewise_rate,
    calc_weighted_interest_rate,
)

# Weights
from lendmath.core.math.weights import calc_weights

__all__ = [
    # Numerical Safeguards — NaN/Inf sanitization
    "is_valid_float",
    "sanitize_float",
    # Numerical Safeguards — Utilities
    "clamp",
    "round_to_decimals",
    # Numerical Safeguards — Validation
    "validate_int",
    "validate_non_negative_int",
    "validate_positive_int",
    # Scaled — Constants
    "LOG_GUARD_BITS",
    "POW_GUARD_DIGITS",
    # Scaled — Types
    "LogBase",
    "RoundingMode",
    # Scaled — Functions
    "clamp_int",
    "div_round",
    "div_scaled",
    "frac_bits_for",
    "from_scaled",
    "log2_scaled",
    "log_base_scaled",
    "mul_div_round",
    "mul_scaled",
    "pow10",
    "pow_int_scaled",
    "precompute_log_base",
    "round_int_by_step",
    "to_big_int",
    "to_scaled",
    # Two's Complement
    "to_int32",
    "to_int64",
    "to_signed_n",
    "to_unsigned_int32",
    "to_unsigned_int64",
    "to_unsigned_n",
    # Sqrt Price
    "big_price_from_sqrt",
    "big_price_from_sqrt_q64",
    "big_price_from_sqrt_q96",
    "price_from_sqrt_x64",
    "price_from_sqrt_x64_with_ratio",
    # Tick ↔ Price — Constants
    "DEFAULT_TICK_SCALE",
    "TICK_BASE",
    # Tick ↔ Price — Functions
    "price_to_tick",
    "round_tick_to_spacing",
    "tick_from_chain",
    "tick_log_base",
    "tick_to_price",
    # Leverage
    "calc_leverage",
    "calc_max_withdrawable",
    "decrease_by_leverage",
    "increase_by_leverage",
    "ltv_to_leverage",
    # Interest Rate — Constants
    "SECONDS_PER_YEAR",
    # Interest Rate — Functions
    "calc_interest_for_time",
    "calc_piecewise_rate",
    "calc_weighted_interest_rate",
    # Weights
    "calc_weights",
]
