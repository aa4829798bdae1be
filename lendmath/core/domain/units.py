"""
Units — соглашение о масштабированных величинах

Величина леджера — пара (value: int, decimals: int), означающая
value / 10^decimals. Это не отдельный тип, а соглашение вызывающего.

ЗАПРЕЩЕНО смешивать decimals без явного rescale из этого модуля.
"""

from typing import Final

from lendmath.core.validation import validate_non_negative_int


# =============================================================================
# DECIMALS ПРОТОКОЛА
# =============================================================================

# Цены оракула и стоимость аккаунта/долга в USD
ORACLE_DECIMALS: Final[int] = 8

# Процентные ставки
INTEREST_DECIMALS: Final[int] = 8

# Health factor
HEALTH_FACTOR_DECIMALS: Final[int] = 8


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def rescale(value: int, from_decimals: int, to_decimals: int) -> int:
    """
    Перевод масштабированной величины из одной шкалы в другую.

    При уменьшении точности лишние знаки отбрасываются к нулю,
    как при целочисленном делении в контракте.

    Args:
        value: Масштабированное значение
        from_decimals: Текущая шкала
        to_decimals: Целевая шкала

    Returns:
        value в шкале 10^to_decimals

    Raises:
        InvalidArgument: Если decimals не целые неотрицательные

    Examples:
        >>> rescale(1_234_567, 6, 8)
        123456700
        >>> rescale(-1_999, 3, 0)
        -1
    """
    validate_non_negative_int(from_decimals, "from_decimals")
    validate_non_negative_int(to_decimals, "to_decimals")

    if from_decimals == to_decimals:
        return value

    if to_decimals > from_decimals:
        return value * 10 ** (to_decimals - from_decimals)

    factor = 10 ** (from_decimals - to_decimals)
    quotient = abs(value) // factor
    return quotient if value >= 0 else -quotient


def calc_decimal_ratio(decimals_a: int, decimals_b: int) -> float:
    """
    Отношение двух шкал: 10^(decimals_a - decimals_b).

    Только для отображения и сравнения с float-SDK; в расчётах ядра
    используется целочисленный pow10.
    """
    validate_non_negative_int(decimals_a, "decimals_a")
    validate_non_negative_int(decimals_b, "decimals_b")
    return 10.0 ** (decimals_a - decimals_b)
