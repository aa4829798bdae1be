"""
Tick ↔ Price — конвертация тиков concentrated liquidity AMM

Цена пары на тике t: price = 1.0001^t (с поправкой на decimals токенов).

    price_to_tick: tick = log_1.0001(price · 10^(decB - decA)),
                   затем отбрасывание дробной части, привязка к spacing
                   fee tier (half away from zero) и clamp к границам tier
    tick_to_price: price = 1.0001^tick · 10^(decA - decB)

log2(1.0001) считается один раз на процесс (лениво, под lock) и далее
не меняется. Повторная инициализация при гонке невозможна.

Round-trip tick_to_price(price_to_tick(p)) ≈ p с точностью до одного
шага spacing: price_to_tick привязывает результат к дискретной сетке.
"""

import logging
import threading
from decimal import Decimal
from typing import Final

from lendmath.core.domain.fee_tiers import FeeTierIndex, get_fee_tier
from lendmath.core.math.numerical_safeguards import (
    validate_non_negative_int,
)
from lendmath.core.math.scaled import (
    LOG_GUARD_BITS,
    LogBase,
    RoundingMode,
    clamp_int,
    div_round,
    log_base_scaled,
    mul_div_round,
    pow10,
    pow_int_scaled,
    precompute_log_base,
    round_int_by_step,
    to_big_int,
    to_scaled,
)
from lendmath.core.math.twos_complement import to_int32

logger = logging.getLogger(__name__)

# Геометрический шаг цены на один тик
TICK_BASE: Final[str] = "1.0001"

# Шкала, в которой предвычисляется log2(TICK_BASE) и считаются цены по умолчанию
DEFAULT_TICK_SCALE: Final[int] = 18

_tick_log_base: LogBase | None = None
_tick_log_base_lock = threading.Lock()


def tick_log_base() -> LogBase:
    """
    log2(1.0001) в двоичной фиксированной точке.

    Вычисляется при первом обращении и кэшируется на процесс.
    """
    global _tick_log_base

    cached = _tick_log_base
    if cached is not None:
        return cached

    with _tick_log_base_lock:
        if _tick_log_base is None:
            _tick_log_base = precompute_log_base(TICK_BASE, DEFAULT_TICK_SCALE, LOG_GUARD_BITS)
            logger.debug(
                "Tick log base initialised: base=%s decimals=%d frac_bits=%d",
                TICK_BASE,
                _tick_log_base.decimals,
                _tick_log_base.frac_bits,
            )
        return _tick_log_base


def _apply_decimals_delta(value: int, delta: int) -> int:
    # value · 10^delta одной операцией с отбрасыванием к нулю
    if delta >= 0:
        return value * pow10(delta)
    return div_round(value, pow10(-delta), RoundingMode.TRUNC)


# =============================================================================
# PRICE → TICK
# =============================================================================


def price_to_tick(
    price: int | str | float | Decimal,
    fee_tier_index: FeeTierIndex | int,
    decimals_a: int,
    decimals_b: int,
    scale: int = DEFAULT_TICK_SCALE,
) -> int | None:
    """
    Ближайший допустимый тик для человеческой цены пары A/B.

    Args:
        price: Цена A в единицах B (не масштабированная)
        fee_tier_index: Fee tier пула (spacing и границы тиков)
        decimals_a: decimals токена A
        decimals_b: decimals токена B
        scale: Рабочая шкала вычислений (default: 18)

    Returns:
        Тик, кратный spacing и лежащий в [lowest_tick, highest_tick];
        None, если цена (после поправки на decimals) не положительна

    Raises:
        InvalidArgument: неизвестный fee tier, отрицательный scale/decimals,
            нечисловая цена

    Examples:
        >>> price_to_tick("4.36716153", FeeTierIndex.PER_0_05_SPACING_5, 8, 6)
        -31310
    """
    validate_non_negative_int(scale, "scale")
    validate_non_negative_int(decimals_a, "decimals_a")
    validate_non_negative_int(decimals_b, "decimals_b")
    tier = get_fee_tier(fee_tier_index)

    price_scaled = to_scaled(price, scale)
    if price_scaled <= 0:
        logger.debug("No tick for non-positive price %r", price)
        return None

    adjusted = _apply_decimals_delta(price_scaled, decimals_b - decimals_a)
    if adjusted <= 0:
        logger.debug(
            "No tick: price %r vanishes at scale %d after decimals adjustment", price, scale
        )
        return None

    tick_scaled = log_base_scaled(adjusted, scale, tick_log_base())
    tick_raw = div_round(tick_scaled, pow10(scale), RoundingMode.TRUNC)

    tick = round_int_by_step(tick_raw, tier.spacing, RoundingMode.HALF_AWAY_ZERO)
    clamped = clamp_int(tick, tier.lowest_tick, tier.highest_tick)
    if clamped != tick:
        logger.debug(
            "Tick %d clamped to %d for fee tier %s", tick, clamped, tier.index.name
        )
    return clamped


# =============================================================================
# TICK → PRICE
# =============================================================================


def tick_to_price(
    tick: int,
    decimals_a: int,
    decimals_b: int,
    scale: int = DEFAULT_TICK_SCALE,
) -> int:
    """
    Цена пары A/B на тике, масштабированная на 10^scale.

    Тик уже знаковый: сырой u32 с цепочки сначала декодируется
    через tick_from_chain.

    Examples:
        >>> tick_to_price(0, 6, 6, 8)
        100000000
    """
    validate_non_negative_int(scale, "scale")
    validate_non_negative_int(decimals_a, "decimals_a")
    validate_non_negative_int(decimals_b, "decimals_b")

    price_raw = pow_int_scaled(
        to_scaled(TICK_BASE, scale),
        to_big_int(tick),
        scale,
        RoundingMode.TRUNC,
    )

    delta = decimals_a - decimals_b
    if delta >= 0:
        return mul_div_round(price_raw, pow10(delta), 1, RoundingMode.TRUNC)
    return mul_div_round(price_raw, 1, pow10(-delta), RoundingMode.TRUNC)


# =============================================================================
# ХЕЛПЕРЫ ДЛЯ СЫРЫХ ТИКОВ
# =============================================================================


def tick_from_chain(raw_tick: int | str) -> int:
    """
    Знаковый тик из значения u32, как его отдаёт цепочка.

    Examples:
        >>> tick_from_chain(4294935983)
        -31313
    """
    return to_int32(raw_tick)


def round_tick_to_spacing(tick: int, fee_tier_index: FeeTierIndex | int) -> int:
    """
    Привязка произвольного тика к сетке fee tier с clamp к его границам.

    Examples:
        >>> round_tick_to_spacing(-31313, FeeTierIndex.PER_0_05_SPACING_5)
        -31315
    """
    tier = get_fee_tier(fee_tier_index)
    tick = round_int_by_step(to_big_int(tick), tier.spacing, RoundingMode.HALF_AWAY_ZERO)
    return clamp_int(tick, tier.lowest_tick, tier.highest_tick)
