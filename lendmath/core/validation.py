"""
Валидация целочисленных параметров ядра (bits, scale, decimals, step).

Общая для math и domain: модуль не зависит от остальных пакетов ядра.
"""

from lendmath.core.errors import InvalidArgument


def _is_int(value: object) -> bool:
    # bool является подклассом int, но как количество бит/знаков не принимается
    return isinstance(value, int) and not isinstance(value, bool)


def validate_positive_int(value: int, name: str) -> None:
    """
    Валидация, что параметр — целое число > 0 (например, bits).

    Raises:
        InvalidArgument: Если value не int или value <= 0
    """
    if not _is_int(value) or value <= 0:
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")


def validate_non_negative_int(value: int, name: str) -> None:
    """
    Валидация, что параметр — целое число >= 0 (scale, decimals, places).

    Raises:
        InvalidArgument: Если value не int или value < 0
    """
    if not _is_int(value) or value < 0:
        raise InvalidArgument(f"{name} must be a non-negative integer, got {value!r}")


def validate_int(value: int, name: str) -> None:
    """
    Валидация, что параметр — целое число любого знака (decimals_delta).

    Raises:
        InvalidArgument: Если value не int
    """
    if not _is_int(value):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
