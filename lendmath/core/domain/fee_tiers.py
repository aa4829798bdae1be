"""
Fee Tiers — шаг тиков и допустимый диапазон для пулов concentrated liquidity

Каждый fee tier задаёт spacing (тик позиции обязан быть кратен ему) и
границы [lowest_tick, highest_tick]. Таблица воспроизводится точно.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from lendmath.core.errors import InvalidArgument


class FeeTierIndex(IntEnum):
    """Индекс fee tier пула (комиссия в %, spacing тиков)."""

    PER_0_01_SPACING_1 = 0
    PER_0_05_SPACING_5 = 1
    PER_0_3_SPACING_60 = 2
    PER_1_SPACING_200 = 3
    PER_0_1_SPACING_20 = 4
    PER_0_25_SPACING_50 = 5


@dataclass(frozen=True)
class FeeTier:
    """Параметры тиков одного fee tier."""

    index: FeeTierIndex
    spacing: int
    lowest_tick: int
    highest_tick: int


FEE_TIERS: Final[dict[FeeTierIndex, FeeTier]] = {
    FeeTierIndex.PER_0_01_SPACING_1: FeeTier(FeeTierIndex.PER_0_01_SPACING_1, 1, -443636, 443636),
    FeeTierIndex.PER_0_05_SPACING_5: FeeTier(FeeTierIndex.PER_0_05_SPACING_5, 5, -443630, 443630),
    FeeTierIndex.PER_0_3_SPACING_60: FeeTier(FeeTierIndex.PER_0_3_SPACING_60, 60, -443580, 443580),
    FeeTierIndex.PER_1_SPACING_200: FeeTier(FeeTierIndex.PER_1_SPACING_200, 200, -443600, 443600),
    FeeTierIndex.PER_0_1_SPACING_20: FeeTier(FeeTierIndex.PER_0_1_SPACING_20, 20, -443620, 443620),
    FeeTierIndex.PER_0_25_SPACING_50: FeeTier(FeeTierIndex.PER_0_25_SPACING_50, 50, -443600, 443600),
}


def get_fee_tier(fee_tier_index: FeeTierIndex | int) -> FeeTier:
    """
    Параметры fee tier по индексу.

    Raises:
        InvalidArgument: неизвестный индекс
    """
    if isinstance(fee_tier_index, bool):
        raise InvalidArgument(f"unknown fee tier index: {fee_tier_index!r}")
    try:
        return FEE_TIERS[FeeTierIndex(fee_tier_index)]
    except ValueError as exc:
        raise InvalidArgument(f"unknown fee tier index: {fee_tier_index!r}") from exc
