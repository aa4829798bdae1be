"""
Leverage — риск-метрики кредитного аккаунта

Все суммы — масштабированные int (обычно ORACLE_DECIMALS = 8).

    equity   = account_value - debt
    leverage = account_value / equity

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. equity == 0 совпадает с границей ликвидации: деление не выполняется,
   результат NaN (0/0) или +inf — это значения, а не ошибки
2. debt == 0 → leverage ровно 1, без деления
3. Минимальная стоимость аккаунта округляется вверх (консервативно):
   вывод никогда не превышает безопасный
"""

import math
from decimal import Decimal

from lendmath.core.domain.units import ORACLE_DECIMALS
from lendmath.core.errors import InvalidArgument
from lendmath.core.math.numerical_safeguards import (
    round_to_decimals,
    validate_non_negative_int,
)
from lendmath.core.math.scaled import (
    RoundingMode,
    div_round,
    div_scaled,
    from_scaled,
    mul_div_round,
    pow10,
    to_big_int,
    to_scaled,
)

# Шкала для промежуточного представления плеча в increase/decrease_by_leverage
_LEVERAGE_SCALE = 18

# Проценты с двумя знаками: 1% = 100 единиц, 100% = 10_000
_PERCENT_BPS = 10_000


# =============================================================================
# LEVERAGE
# =============================================================================


def calc_leverage(
    account_value: int | str,
    debt: int | str,
    decimals: int = ORACLE_DECIMALS,
) -> float:
    """
    Плечо аккаунта: account_value / (account_value - debt).

    Args:
        account_value: Стоимость аккаунта (scaled int)
        debt: Долг (scaled int, та же шкала)
        decimals: Шкала обоих значений (default: 8)

    Returns:
        Плечо как float, округлённое до 2 знаков; 1.0 без долга;
        +inf при нулевом equity; NaN при account_value == debt == 0.
        Отрицательный equity даёт отрицательное плечо.

    Examples:
        >>> calc_leverage(150, 50)
        1.5
        >>> calc_leverage(120, 100)
        6.0
        >>> calc_leverage(80, 100)
        -4.0
    """
    validate_non_negative_int(decimals, "decimals")
    account_value = to_big_int(account_value)
    debt = to_big_int(debt)

    equity = account_value - debt
    if equity == 0:
        return math.nan if account_value == 0 else math.inf

    if debt == 0:
        return 1.0

    leverage_scaled = div_scaled(account_value, equity, decimals, RoundingMode.HALF_AWAY_ZERO)
    # округляется уже float: 1.005 хранится как 1.00499… и даёт 1.0
    return round_to_decimals(float(from_scaled(leverage_scaled, decimals)), 2)


def calc_max_withdrawable(
    account_value: int | str,
    debt_value: int | str,
    max_leverage: int | float | str | Decimal,
    decimals: int = ORACLE_DECIMALS,
) -> int:
    """
    Максимальная сумма вывода, после которой плечо не превысит max_leverage.

        min_account_value = ceil(max_leverage · debt / (max_leverage - 1))
        withdrawable      = max(0, account_value - min_account_value)

    Args:
        account_value: Стоимость аккаунта (scaled int)
        debt_value: Долг (scaled int, та же шкала)
        max_leverage: Допустимое плечо, может быть дробным (3.5)
        decimals: Шкала значений и точность представления max_leverage

    Returns:
        Сумма вывода в той же шкале; весь account_value без долга;
        0 при max_leverage <= 1 или если плечо уже >= max_leverage

    Examples:
        >>> calc_max_withdrawable(200_000000, 100_000000, 5, 6)
        75000000
    """
    validate_non_negative_int(decimals, "decimals")
    account_value = to_big_int(account_value)
    debt_value = to_big_int(debt_value)

    if debt_value <= 0:
        return account_value

    one = pow10(decimals)
    max_leverage_scaled = to_scaled(max_leverage, decimals)
    if max_leverage_scaled <= one:
        return 0

    current = calc_leverage(account_value, debt_value, decimals)
    if current >= float(from_scaled(max_leverage_scaled, decimals)):
        return 0

    min_account_value = mul_div_round(
        debt_value,
        max_leverage_scaled,
        max_leverage_scaled - one,
        RoundingMode.UP,
    )
    return max(0, account_value - min_account_value)


# =============================================================================
# LTV И ПРОЦЕНТНЫЕ ПРЕОБРАЗОВАНИЯ
# =============================================================================


def ltv_to_leverage(ltv: int | str, decimals: int = 8) -> float:
    """
    Плечо, соответствующее LTV: ltv / (1 - ltv), 1 знак после запятой.

    Args:
        ltv: LTV, масштабированный на 10^decimals (80% → 80_000_000)
        decimals: Шкала ltv (default: 8)

    Returns:
        Плечо; +inf при ltv >= 100%

    Raises:
        InvalidArgument: ltv < 0

    Examples:
        >>> ltv_to_leverage(80_000_000)
        4.0
    """
    validate_non_negative_int(decimals, "decimals")
    ltv = to_big_int(ltv)
    if ltv < 0:
        raise InvalidArgument(f"ltv must be non-negative, got {ltv}")

    one = pow10(decimals)
    if ltv >= one:
        return math.inf

    ratio = ltv / one
    if ratio >= 1.0:
        # ltv < 100%, но неотличим от 1 в float
        return math.inf
    return round_to_decimals(ratio / (1 - ratio), 1)


def _leverage_scaled(leverage: int | float | str | Decimal) -> int:
    scaled = to_scaled(leverage, _LEVERAGE_SCALE)
    if scaled <= 0:
        raise InvalidArgument(f"leverage must be positive, got {leverage!r}")
    return scaled


def increase_by_leverage(amount: int | str, leverage: int | float | str | Decimal) -> int:
    """
    Увеличение суммы на (leverage - 1) · 100% (процент с 2 знаками).

    Examples:
        >>> increase_by_leverage(1_000_000, 3)
        3000000
    """
    amount = to_big_int(amount)
    one = pow10(_LEVERAGE_SCALE)
    percent_bps = div_round(
        (_leverage_scaled(leverage) - one) * _PERCENT_BPS,
        one,
        RoundingMode.HALF_AWAY_ZERO,
    )
    return mul_div_round(amount, _PERCENT_BPS + percent_bps, _PERCENT_BPS, RoundingMode.TRUNC)


def decrease_by_leverage(amount: int | str, leverage: int | float | str | Decimal) -> int:
    """
    Уменьшение суммы на (1 - 1/leverage) · 100% (процент с 2 знаками).

    Examples:
        >>> decrease_by_leverage(3_000_000, 3)
        999900
    """
    amount = to_big_int(amount)
    leverage_scaled = _leverage_scaled(leverage)
    percent_bps = div_round(
        (leverage_scaled - pow10(_LEVERAGE_SCALE)) * _PERCENT_BPS,
        leverage_scaled,
        RoundingMode.HALF_AWAY_ZERO,
    )
    return mul_div_round(amount, _PERCENT_BPS - percent_bps, _PERCENT_BPS, RoundingMode.TRUNC)
