"""
Тесты для доменных моделей: Kink, Debt, FeeTier, units

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Immutability (frozen=True)
3. Алиасы полей внешнего слоя (debtUSD / interestRate)
4. Таблицу fee tiers
5. Конвертеры decimals
"""

import dataclasses

import pytest
from pydantic import ValidationError

from lendmath.core.domain import (
    FEE_TIERS,
    HEALTH_FACTOR_DECIMALS,
    INTEREST_DECIMALS,
    ORACLE_DECIMALS,
    Debt,
    FeeTierIndex,
    Kink,
    calc_decimal_ratio,
    get_fee_tier,
    rescale,
)
from lendmath.core.errors import InvalidArgument


# =============================================================================
# KINK / DEBT
# =============================================================================


class TestKink:
    """Тесты для модели Kink"""

    def test_create(self) -> None:
        """Создание точки кривой"""
        kink = Kink(util=0.8, rate=0.12)
        assert kink.util == 0.8
        assert kink.rate == 0.12

    def test_negative_util_allowed(self) -> None:
        """util не ограничен снизу (шкала задаётся пулом)"""
        assert Kink(util=-1, rate=0).util == -1.0

    def test_negative_rate_rejected(self) -> None:
        """rate >= 0"""
        with pytest.raises(ValidationError):
            Kink(util=0.5, rate=-0.01)

    def test_nan_rejected(self) -> None:
        """NaN/Inf не допускаются"""
        with pytest.raises(ValidationError):
            Kink(util=float("nan"), rate=0.1)
        with pytest.raises(ValidationError):
            Kink(util=0.5, rate=float("inf"))

    def test_frozen(self) -> None:
        """Immutability"""
        kink = Kink(util=0.5, rate=0.1)
        with pytest.raises(ValidationError):
            kink.rate = 0.2  # type: ignore[misc]

    def test_json_roundtrip(self) -> None:
        """Сериализация/десериализация JSON"""
        kink = Kink(util=0.5, rate=0.1)
        assert Kink.model_validate_json(kink.model_dump_json()) == kink


class TestDebt:
    """Тесты для модели Debt"""

    def test_snake_case_fields(self) -> None:
        """Создание по именам полей"""
        debt = Debt(debt_usd=100, interest_rate=5)
        assert debt.debt_usd == 100.0
        assert debt.interest_rate == 5.0

    def test_camel_case_aliases(self) -> None:
        """Создание по алиасам внешнего слоя"""
        debt = Debt.model_validate({"debtUSD": 100, "interestRate": 5})
        assert debt == Debt(debt_usd=100, interest_rate=5)

    def test_dump_by_alias(self) -> None:
        """Выгрузка с алиасами"""
        dumped = Debt(debt_usd=1, interest_rate=2).model_dump(by_alias=True)
        assert dumped == {"debtUSD": 1.0, "interestRate": 2.0}

    def test_negative_debt_rejected(self) -> None:
        """debt_usd >= 0"""
        with pytest.raises(ValidationError):
            Debt(debt_usd=-1, interest_rate=5)

    def test_frozen(self) -> None:
        """Immutability"""
        debt = Debt(debt_usd=1, interest_rate=2)
        with pytest.raises(ValidationError):
            debt.debt_usd = 3  # type: ignore[misc]


# =============================================================================
# FEE TIERS
# =============================================================================


class TestFeeTiers:
    """Тесты для таблицы fee tiers"""

    @pytest.mark.parametrize(
        "index,spacing,lowest,highest",
        [
            (0, 1, -443636, 443636),
            (1, 5, -443630, 443630),
            (2, 60, -443580, 443580),
            (3, 200, -443600, 443600),
            (4, 20, -443620, 443620),
            (5, 50, -443600, 443600),
        ],
    )
    def test_table(self, index, spacing, lowest, highest) -> None:
        """Таблица воспроизводится точно"""
        tier = get_fee_tier(index)
        assert tier.index == FeeTierIndex(index)
        assert tier.spacing == spacing
        assert tier.lowest_tick == lowest
        assert tier.highest_tick == highest

    def test_bounds_are_multiples_of_spacing(self) -> None:
        """Границы тиков кратны spacing"""
        for tier in FEE_TIERS.values():
            assert tier.lowest_tick % tier.spacing == 0
            assert tier.highest_tick % tier.spacing == 0
            assert tier.lowest_tick == -tier.highest_tick

    def test_every_index_present(self) -> None:
        """Для каждого индекса есть запись"""
        assert set(FEE_TIERS) == set(FeeTierIndex)

    @pytest.mark.parametrize("index", [6, -1, True])
    def test_unknown_index(self, index) -> None:
        """Неизвестный индекс → InvalidArgument"""
        with pytest.raises(InvalidArgument, match="fee tier"):
            get_fee_tier(index)

    def test_frozen(self) -> None:
        """FeeTier неизменяем"""
        tier = get_fee_tier(FeeTierIndex.PER_0_3_SPACING_60)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tier.spacing = 1  # type: ignore[misc]


# =============================================================================
# UNITS
# =============================================================================


class TestUnits:
    """Тесты для соглашений о decimals"""

    def test_protocol_decimals(self) -> None:
        """Шкалы протокола"""
        assert ORACLE_DECIMALS == 8
        assert INTEREST_DECIMALS == 8
        assert HEALTH_FACTOR_DECIMALS == 8

    def test_rescale_up(self) -> None:
        """Увеличение точности — точное домножение"""
        assert rescale(1_234_567, 6, 8) == 123_456_700

    def test_rescale_down_truncates_toward_zero(self) -> None:
        """Уменьшение точности отбрасывает знаки к нулю"""
        assert rescale(1_999, 3, 0) == 1
        assert rescale(-1_999, 3, 0) == -1

    def test_rescale_same(self) -> None:
        """Та же шкала — без изменений"""
        assert rescale(42, 8, 8) == 42

    def test_rescale_negative_decimals(self) -> None:
        """Отрицательная шкала → InvalidArgument"""
        with pytest.raises(InvalidArgument):
            rescale(1, -1, 2)

    @pytest.mark.parametrize(
        "from_decimals,to_decimals",
        [(True, 2), (6, False), (6.0, 8), ("6", 8), (None, 8)],
    )
    def test_rescale_rejects_non_int_decimals(self, from_decimals, to_decimals) -> None:
        """bool, float и строки как decimals → InvalidArgument"""
        with pytest.raises(InvalidArgument, match="decimals"):
            rescale(100, from_decimals, to_decimals)

    @pytest.mark.parametrize(
        "decimals_a,decimals_b,expected",
        [(8, 6, 100.0), (6, 8, 0.01), (6, 6, 1.0), (18, 6, 1e12), (0, 2, 0.01)],
    )
    def test_decimal_ratio(self, decimals_a, decimals_b, expected) -> None:
        """10^(a - b)"""
        assert calc_decimal_ratio(decimals_a, decimals_b) == pytest.approx(expected)

    @pytest.mark.parametrize("decimals_a,decimals_b", [(True, 6), (6, -1), (6.0, 6)])
    def test_decimal_ratio_rejects_invalid_decimals(self, decimals_a, decimals_b) -> None:
        """Некорректная шкала → InvalidArgument"""
        with pytest.raises(InvalidArgument, match="decimals"):
            calc_decimal_ratio(decimals_a, decimals_b)
