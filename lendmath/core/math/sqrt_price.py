"""
Sqrt Price — цена пары из √price в формате QN.N

AMM хранит корень цены в двоичной фиксированной точке (Q64.64, Q96.96).
Человеческая цена в шкале 10^out_scale:

    delta >= 0:  price = sqrtQ² · 10^(delta + out_scale) / 2^(2·bits)
    delta <  0:  price = sqrtQ² · 10^out_scale / (2^(2·bits) · 10^(-delta))

где delta = decimals(A) - decimals(B). Считается ОДНИМ mul-div с
округлением; два последовательных деления накапливали бы ошибку.

По умолчанию HALF_EVEN — так округляет контракт. Результат должен
совпадать с эталонным вычислением модуля пула бит-в-бит.
"""

from decimal import Decimal

from lendmath.core.errors import InvalidArgument
from lendmath.core.math.numerical_safeguards import (
    validate_int,
    validate_non_negative_int,
    validate_positive_int,
)
from lendmath.core.math.scaled import RoundingMode, mul_div_round, pow10, to_big_int


def big_price_from_sqrt(
    sqrt_q: int | str | Decimal,
    bits: int = 64,
    decimals_delta: int = 0,
    out_scale: int = 8,
    mode: RoundingMode = RoundingMode.HALF_EVEN,
) -> int:
    """
    Цена из √price в формате Q{bits}.{bits}.

    Args:
        sqrt_q: √price в фиксированной точке (неотрицательный)
        bits: Число дробных бит формата (64, 96, …)
        decimals_delta: decimals(A) - decimals(B), может быть отрицательным
        out_scale: Число десятичных знаков результата
        mode: Режим округления (default: HALF_EVEN)

    Returns:
        Цена, масштабированная на 10^out_scale

    Raises:
        InvalidArgument: bits не положительное целое, out_scale < 0, sqrt_q < 0
    """
    validate_positive_int(bits, "bits")
    validate_non_negative_int(out_scale, "out_scale")
    validate_int(decimals_delta, "decimals_delta")

    sqrt_value = to_big_int(sqrt_q)
    if sqrt_value < 0:
        raise InvalidArgument(f"sqrt_q must be non-negative, got {sqrt_value}")

    numerator = sqrt_value * sqrt_value
    denominator = 1 << (2 * bits)

    if decimals_delta >= 0:
        return mul_div_round(numerator, pow10(decimals_delta + out_scale), denominator, mode)
    return mul_div_round(
        numerator,
        pow10(out_scale),
        denominator * pow10(-decimals_delta),
        mode,
    )


def big_price_from_sqrt_q64(
    sqrt_q64: int | str | Decimal,
    decimals_delta: int,
    out_scale: int = 8,
    mode: RoundingMode = RoundingMode.HALF_EVEN,
) -> int:
    """
    Цена из √price в Q64.64.

    Examples:
        >>> big_price_from_sqrt_q64(3860534275239885696, 2, 8, RoundingMode.HALF_AWAY_ZERO)
        437981110
    """
    return big_price_from_sqrt(sqrt_q64, 64, decimals_delta, out_scale, mode)


def big_price_from_sqrt_q96(
    sqrt_q96: int | str | Decimal,
    decimals_delta: int,
    out_scale: int = 8,
    mode: RoundingMode = RoundingMode.HALF_EVEN,
) -> int:
    """Цена из √price в Q96.96 (sqrtPriceX96)."""
    return big_price_from_sqrt(sqrt_q96, 96, decimals_delta, out_scale, mode)


def price_from_sqrt_x64(
    sqrt_x64: int | str,
    decimals0: int,
    decimals1: int,
    final_precision: int = 8,
) -> int:
    """
    floor(цена · 10^final_precision) из Q64.64 по decimals обоих токенов.

    Вариант без выбора режима: одно целочисленное деление с отбрасыванием.
    """
    validate_non_negative_int(decimals0, "decimals0")
    validate_non_negative_int(decimals1, "decimals1")
    if isinstance(sqrt_x64, str) and not sqrt_x64.strip():
        raise InvalidArgument("sqrt_x64 must be a non-empty string or int")

    return big_price_from_sqrt(
        sqrt_x64,
        64,
        decimals0 - decimals1,
        final_precision,
        RoundingMode.FLOOR,
    )


def _power_of_ten_exponent(decimals_ratio: int | float | Decimal) -> int:
    # k, для которого decimals_ratio == 10^k ровно
    if isinstance(decimals_ratio, bool) or not isinstance(decimals_ratio, (int, float, Decimal)):
        raise InvalidArgument(f"decimals_ratio must be a number, got {decimals_ratio!r}")

    if isinstance(decimals_ratio, float):
        ratio = Decimal(repr(decimals_ratio))
    else:
        ratio = Decimal(decimals_ratio)
    if not ratio.is_finite() or ratio <= 0:
        raise InvalidArgument(
            f"decimals_ratio must be a positive finite number, got {decimals_ratio!r}"
        )

    _, digits, exponent = ratio.normalize().as_tuple()
    if digits != (1,):
        raise InvalidArgument(
            f"decimals_ratio must be an exact power of 10, got {decimals_ratio!r}"
        )
    return exponent


def price_from_sqrt_x64_with_ratio(
    sqrt_x64: int | str,
    decimals_ratio: int | float | Decimal,
    final_precision: int = 8,
) -> int:
    """
    floor(цена · 10^final_precision) из Q64.64 по готовому отношению шкал.

    Args:
        sqrt_x64: √price в Q64.64
        decimals_ratio: 10^(decimals(A) - decimals(B)), точная степень десяти
        final_precision: Число десятичных знаков результата

    Raises:
        InvalidArgument: decimals_ratio не положительный или не степень 10,
            пустая строка sqrt_x64, final_precision < 0

    Examples:
        >>> price_from_sqrt_x64_with_ratio(1 << 64, 0.01, 8)
        1000000
    """
    validate_non_negative_int(final_precision, "final_precision")
    if isinstance(sqrt_x64, str) and not sqrt_x64.strip():
        raise InvalidArgument("sqrt_x64 must be a non-empty string or int")

    return big_price_from_sqrt(
        sqrt_x64,
        64,
        _power_of_ten_exponent(decimals_ratio),
        final_precision,
        RoundingMode.FLOOR,
    )
