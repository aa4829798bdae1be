"""
Interest Rate — начисление процентов и кривые ставок пулов

- calc_interest_for_time: проценты по долгу за период (scaled int, TRUNC)
- calc_piecewise_rate: кусочно-линейная кривая ставки от utilization
- calc_weighted_interest_rate: средневзвешенная по долгу ставка

ФОРМУЛЫ:
    interest = debt · rate · period / (SECONDS_PER_YEAR · 10^interest_decimals)
    rate(u)  = r0 + (u - u0) / (u1 - u0) · (r1 - r0),   u ∈ [u0, u1]
    avg_rate = Σ debt_i / total · rate_i

Проценты округляются к нулю: ядро никогда не начисляет больше, чем контракт.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Final

from pydantic import ValidationError

from lendmath.core.domain.models import Debt, Kink
from lendmath.core.domain.units import INTEREST_DECIMALS
from lendmath.core.errors import InvalidArgument
from lendmath.core.math.numerical_safeguards import (
    clamp,
    is_valid_float,
    round_to_decimals,
    validate_non_negative_int,
)
from lendmath.core.math.scaled import RoundingMode, mul_div_round, pow10, to_big_int

logger = logging.getLogger(__name__)

# Год без поправки на високосные
SECONDS_PER_YEAR: Final[int] = 365 * 24 * 60 * 60


# =============================================================================
# НАЧИСЛЕНИЕ ПРОЦЕНТОВ
# =============================================================================


def calc_interest_for_time(
    debt: int | str,
    interest_rate: int | str,
    period_seconds: int | float,
    interest_decimals: int = INTEREST_DECIMALS,
) -> int:
    """
    Проценты по долгу за период.

    Args:
        debt: Долг в базовых единицах (scaled int)
        interest_rate: Годовая ставка, масштабированная на 10^interest_decimals
        period_seconds: Длительность периода в секундах
        interest_decimals: Шкала ставки (default: 8)

    Returns:
        Проценты в единицах долга, округлённые к нулю;
        0 при debt <= 0 или period_seconds <= 0

    Examples:
        >>> calc_interest_for_time(10_000_000_000, 5_000_000, 31_536_000)
        500000000
    """
    validate_non_negative_int(interest_decimals, "interest_decimals")
    debt = to_big_int(debt)

    if debt <= 0 or period_seconds <= 0:
        return 0

    return mul_div_round(
        debt * to_big_int(interest_rate),
        to_big_int(period_seconds),
        SECONDS_PER_YEAR * pow10(interest_decimals),
        RoundingMode.TRUNC,
    )


# =============================================================================
# КУСОЧНО-ЛИНЕЙНАЯ КРИВАЯ
# =============================================================================


def _coerce_kink(raw: Kink | Mapping[str, Any] | Sequence[float]) -> Kink:
    if isinstance(raw, Kink):
        return raw
    try:
        if isinstance(raw, Mapping):
            return Kink.model_validate(raw)
        if isinstance(raw, Sequence) and not isinstance(raw, str) and len(raw) == 2:
            return Kink(util=raw[0], rate=raw[1])
    except ValidationError as exc:
        raise InvalidArgument(f"invalid kink {raw!r}: {exc}") from exc
    raise InvalidArgument(f"kink must be a Kink, mapping or (util, rate) pair, got {raw!r}")


def calc_piecewise_rate(
    utilization: float,
    kinks: Iterable[Kink | Mapping[str, Any] | Sequence[float]],
) -> float:
    """
    Ставка по кусочно-линейной кривой utilization → rate.

    Точки сортируются по util (копия, вход не изменяется), utilization
    ограничивается диапазоном [min util, max util].

    Повтор util у соседних точек (вертикальный скачок): сегмент нулевой
    ширины возвращает ставку левой точки, как только скан до него дошёл,
    даже если utilization лежит в более правом сегменте. Это поведение
    воспроизводит контракт и не должно «исправляться».

    Args:
        utilization: Utilization пула (в шкале точек кривой)
        kinks: Точки излома: Kink, {"util", "rate"} или (util, rate)

    Returns:
        Ставка в шкале точек кривой

    Raises:
        InvalidArgument: пустая кривая, некорректная точка, NaN/Inf utilization

    Examples:
        >>> calc_piecewise_rate(0.5, [(0.0, 0.05), (1.0, 0.20)])
        0.125
    """
    points = sorted((_coerce_kink(k) for k in kinks), key=lambda k: k.util)
    if not points:
        raise InvalidArgument("need at least one kink")

    if not is_valid_float(utilization):
        raise InvalidArgument(f"utilization must be finite, got {utilization!r}")

    min_util = points[0].util
    max_util = points[-1].util
    util = clamp(utilization, min_util, max_util)
    if util != utilization:
        logger.debug("Utilization %r clamped to %r", utilization, util)

    if util <= min_util or len(points) == 1:
        return points[0].rate

    if util >= max_util:
        return points[-1].rate

    for left, right in zip(points, points[1:]):
        u0, r0 = left.util, left.rate
        u1, r1 = right.util, right.rate

        if u1 - u0 == 0:
            return r0

        if u0 <= util <= u1:
            t = (util - u0) / (u1 - u0)
            return r0 + t * (r1 - r0)

    return points[-1].rate


# =============================================================================
# СРЕДНЕВЗВЕШЕННАЯ СТАВКА
# =============================================================================


def _coerce_debt(raw: Debt | Mapping[str, Any]) -> Debt:
    if isinstance(raw, Debt):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidArgument(f"debt must be a Debt or mapping, got {raw!r}")
    try:
        return Debt.model_validate(raw)
    except ValidationError as exc:
        raise InvalidArgument(f"invalid debt {raw!r}: {exc}") from exc


def calc_weighted_interest_rate(debts: Iterable[Debt | Mapping[str, Any]]) -> float:
    """
    Средневзвешенная по размеру долга ставка, 2 знака после запятой.

    Долги с нулевым размером не участвуют в сумме.

    Returns:
        Средняя ставка; 0.0 для пустого набора или нулевого суммарного долга

    Examples:
        >>> calc_weighted_interest_rate([
        ...     {"debtUSD": 100, "interestRate": 5},
        ...     {"debtUSD": 300, "interestRate": 12},
        ... ])
        10.25
    """
    items = [_coerce_debt(d) for d in debts]
    total = sum(d.debt_usd for d in items)
    if total == 0:
        return 0.0

    weighted = 0.0
    for item in items:
        if item.debt_usd == 0:
            continue
        weighted += item.interest_rate * (item.debt_usd / total)

    return round_to_decimals(weighted, 2)
