"""
Weights — распределение долей по неотрицательным суммам

    weight_i = amount_i / Σ amount · 100

Сумма весов равна 100 при положительном итоге; при нулевом итоге
(включая пустой вход) все веса равны 0, а не NaN.
"""

from collections.abc import Iterable

from lendmath.core.errors import InvalidArgument
from lendmath.core.math.numerical_safeguards import sanitize_float


def calc_weights(amounts: Iterable[float]) -> list[float]:
    """
    Процентные веса для набора сумм.

    Args:
        amounts: Неотрицательные суммы

    Returns:
        Список весов в процентах (того же порядка и длины)

    Raises:
        InvalidArgument: Если хотя бы одна сумма отрицательна

    Examples:
        >>> calc_weights([50, 0, 150])
        [25.0, 0.0, 75.0]
        >>> calc_weights([0, 0])
        [0.0, 0.0]
    """
    values = list(amounts)

    total = 0.0
    for amount in values:
        if amount < 0:
            raise InvalidArgument("amounts should not be negative")
        total += amount

    if total == 0:
        return [0.0 for _ in values]

    return [sanitize_float(amount / total * 100) for amount in values]
