"""
Numerical Safeguards — защитные примитивы для float-результатов ядра

Модуль обслуживает ту часть ядра, которая возвращает обычные числа (float):
- NaN/Inf санитизация для весов и промежуточных значений
- Округление до фиксированного числа знаков (half-up по точному значению float)
- Clamp для float-диапазонов (utilization)
- Валидаторы целочисленных параметров (реэкспорт из lendmath.core.validation)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Некорректные параметры → InvalidArgument сразу, без тихой деградации
2. Округление выполняется над точным десятичным значением float
3. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# валидаторы параметров реэкспортируются вместе с float-примитивами
from lendmath.core.validation import (
    validate_int,
    validate_non_negative_int,
    validate_positive_int,
)


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Санитизация float: замена NaN/Inf на fallback значение.

    Args:
        value: Исходное значение
        fallback: Значение для замены NaN/Inf (default: 0.0)

    Returns:
        value если валидное, иначе fallback

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_to_decimals(value: float | Decimal, places: int) -> float:
    """
    Округление до `places` знаков после запятой (half away from zero).

    Округляется точное десятичное значение аргумента, а не его двоичное
    приближение: 0.125 → 0.13, 6.6666… → 6.67. NaN/Inf возвращаются как есть.

    Args:
        value: float или Decimal
        places: Количество знаков (>= 0)

    Returns:
        Округлённое значение как float

    Examples:
        >>> round_to_decimals(10.254999, 2)
        10.25
        >>> round_to_decimals(2.5, 0)
        3.0
    """
    validate_non_negative_int(places, "places")

    if isinstance(value, float) and not is_valid_float(value):
        return value

    exact = value if isinstance(value, Decimal) else Decimal(value)
    quantum = Decimal((0, (1,), -places))
    # точность контекста достаточна для любого float, иначе quantize упадёт
    context = Context(prec=max(28, exact.adjusted() + places + 2))
    return float(exact.quantize(quantum, rounding=ROUND_HALF_UP, context=context))


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result
