"""
Тесты для модуля Interest Rate

Проверяет:
1. Начисление процентов за период (округление к нулю)
2. Кусочно-линейную кривую: интерполяция, clamp, вертикальные скачки
3. Неизменность входной коллекции точек
4. Средневзвешенную ставку и обработку нулевых долгов
"""

import pytest

from lendmath.core.domain.models import Debt, Kink
from lendmath.core.errors import InvalidArgument
from lendmath.core.math.interest_rate import (
    SECONDS_PER_YEAR,
    calc_interest_for_time,
    calc_piecewise_rate,
    calc_weighted_interest_rate,
)


@pytest.fixture
def linear_curve() -> list[tuple[float, float]]:
    """Кривая 5% → 20% на utilization [0, 1]"""
    return [(0.0, 0.05), (1.0, 0.20)]


@pytest.fixture
def jump_curve() -> list[Kink]:
    """Кривая с вертикальным скачком на utilization 0.5"""
    return [
        Kink(util=0.4, rate=0.10),
        Kink(util=0.5, rate=0.11),
        Kink(util=0.5, rate=0.90),
        Kink(util=0.8, rate=0.30),
    ]


# =============================================================================
# НАЧИСЛЕНИЕ ПРОЦЕНТОВ
# =============================================================================


class TestCalcInterestForTime:
    """Тесты для calc_interest_for_time"""

    def test_seconds_per_year(self) -> None:
        """365 дней, без високосной поправки"""
        assert SECONDS_PER_YEAR == 31_536_000

    def test_full_year(self) -> None:
        """5% годовых на 100 за год → 5"""
        assert calc_interest_for_time(10_000_000_000, 5_000_000, 31_536_000, 8) == 500_000_000

    def test_half_year(self) -> None:
        """10% годовых на 200 за полгода → 10"""
        assert calc_interest_for_time(20_000_000_000, 10_000_000, 15_768_000) == 1_000_000_000

    def test_one_second_truncates(self) -> None:
        """3170.97… → 3170 (никогда не округляется вверх)"""
        assert calc_interest_for_time(1_000_000_000_000, 10_000_000, 1) == 3170

    @pytest.mark.parametrize(
        "debt,period",
        [(0, 100), (-5, 100), (1_000, 0), (1_000, -60)],
    )
    def test_zero_for_non_positive_inputs(self, debt, period) -> None:
        """Долг или период <= 0 → 0"""
        assert calc_interest_for_time(debt, 5_000_000, period) == 0

    def test_custom_interest_decimals(self) -> None:
        """Шкала ставки задаётся явно: 10.00% при decimals=2"""
        assert calc_interest_for_time(1_000, 10, SECONDS_PER_YEAR, 2) == 100

    def test_string_inputs(self) -> None:
        """Строковые значения леджера принимаются"""
        assert calc_interest_for_time("10000000000", "5000000", 31_536_000) == 500_000_000

    def test_large_values_exact(self) -> None:
        """Произведение выше 2^128 считается точно"""
        debt = 10**30
        assert calc_interest_for_time(debt, 10**8, SECONDS_PER_YEAR) == debt


# =============================================================================
# КУСОЧНО-ЛИНЕЙНАЯ КРИВАЯ
# =============================================================================


class TestCalcPiecewiseRate:
    """Тесты для calc_piecewise_rate"""

    def test_midpoint(self, linear_curve) -> None:
        """Середина отрезка"""
        assert calc_piecewise_rate(0.5, linear_curve) == pytest.approx(0.125)

    def test_clamped_below(self, linear_curve) -> None:
        """Utilization ниже минимума → ставка первой точки"""
        assert calc_piecewise_rate(-1.0, linear_curve) == pytest.approx(0.05)

    def test_clamped_above(self, linear_curve) -> None:
        """Utilization выше максимума → ставка последней точки"""
        assert calc_piecewise_rate(2.0, linear_curve) == pytest.approx(0.20)

    def test_exact_endpoints(self, linear_curve) -> None:
        """На концах — ставки концевых точек"""
        assert calc_piecewise_rate(0.0, linear_curve) == 0.05
        assert calc_piecewise_rate(1.0, linear_curve) == 0.20

    def test_single_kink(self) -> None:
        """Одна точка → её ставка при любой utilization"""
        assert calc_piecewise_rate(0.9, [(0.5, 0.07)]) == 0.07
        assert calc_piecewise_rate(-3, [(0.5, 0.07)]) == 0.07

    def test_unsorted_input_not_mutated(self) -> None:
        """Вход сортируется в копии, исходный список не меняется"""
        kinks = [(1.0, 0.20), (0.8, 0.10), (0.0, 0.02)]
        snapshot = list(kinks)
        assert calc_piecewise_rate(0.4, kinks) == pytest.approx(0.06)
        assert kinks == snapshot

    def test_multi_segment(self) -> None:
        """Интерполяция на втором отрезке"""
        kinks = [(0.0, 0.0), (0.8, 0.08), (1.0, 1.08)]
        assert calc_piecewise_rate(0.9, kinks) == pytest.approx(0.58)

    def test_accepts_kinks_and_mappings(self, jump_curve) -> None:
        """Kink, словари и пары (util, rate) эквивалентны"""
        as_dicts = [{"util": k.util, "rate": k.rate} for k in jump_curve]
        as_pairs = [(k.util, k.rate) for k in jump_curve]
        for kinks in (jump_curve, as_dicts, as_pairs):
            assert calc_piecewise_rate(0.45, kinks) == pytest.approx(0.105)

    def test_at_jump_point(self, jump_curve) -> None:
        """Ровно на скачке: первый отрезок с u1 == 0.5 даёт левую ставку"""
        assert calc_piecewise_rate(0.5, jump_curve) == pytest.approx(0.11)

    def test_after_jump_returns_left_rate(self, jump_curve) -> None:
        """Правее скачка скан останавливается на вырожденном отрезке"""
        assert calc_piecewise_rate(0.65, jump_curve) == pytest.approx(0.11)

    def test_between_two_jumps(self) -> None:
        """Между двумя скачками срабатывает первый из них"""
        kinks = [(0.0, 0.0), (0.2, 0.1), (0.2, 0.5), (0.6, 0.6), (0.6, 0.9), (1.0, 1.0)]
        assert calc_piecewise_rate(0.4, kinks) == pytest.approx(0.1)

    def test_empty_curve(self) -> None:
        """Пустая кривая → InvalidArgument"""
        with pytest.raises(InvalidArgument, match="at least one kink"):
            calc_piecewise_rate(0.5, [])

    @pytest.mark.parametrize(
        "kink",
        [("a", 0.1), (0.5, -0.1), (0.5, 0.1, 0.2), {"util": 0.5}, 0.5, (float("nan"), 0.1)],
    )
    def test_invalid_kink(self, kink) -> None:
        """Некорректная точка → InvalidArgument"""
        with pytest.raises(InvalidArgument, match="kink"):
            calc_piecewise_rate(0.5, [(0.0, 0.01), kink])

    def test_non_finite_utilization(self, linear_curve) -> None:
        """NaN utilization → InvalidArgument"""
        with pytest.raises(InvalidArgument, match="utilization"):
            calc_piecewise_rate(float("nan"), linear_curve)


# =============================================================================
# СРЕДНЕВЗВЕШЕННАЯ СТАВКА
# =============================================================================


class TestCalcWeightedInterestRate:
    """Тесты для calc_weighted_interest_rate"""

    def test_empty(self) -> None:
        """Пустой набор → 0"""
        assert calc_weighted_interest_rate([]) == 0

    def test_two_debts(self) -> None:
        """100 под 5% и 300 под 12% → 10.25%"""
        debts = [{"debtUSD": 100, "interestRate": 5}, {"debtUSD": 300, "interestRate": 12}]
        assert calc_weighted_interest_rate(debts) == 10.25

    def test_rounded_to_two_decimals(self) -> None:
        """(200·5 + 100·10) / 300 = 6.666… → 6.67"""
        debts = [Debt(debt_usd=200, interest_rate=5), Debt(debt_usd=100, interest_rate=10)]
        assert calc_weighted_interest_rate(debts) == 6.67

    def test_three_debts(self) -> None:
        """Три долга с дробными ставками"""
        debts = [
            {"debt_usd": 200, "interest_rate": 7.33},
            {"debt_usd": 300, "interest_rate": 8.88},
            {"debt_usd": 500, "interest_rate": 10.12},
        ]
        assert calc_weighted_interest_rate(debts) == 9.19

    def test_single_debt(self) -> None:
        """Один долг → его ставка"""
        assert calc_weighted_interest_rate([Debt(debtUSD=42, interestRate=6)]) == 6.0

    def test_zero_debts_ignored(self) -> None:
        """Нулевые долги не влияют на результат"""
        debts = [{"debtUSD": 0, "interestRate": 50}, {"debtUSD": 100, "interestRate": 6}]
        assert calc_weighted_interest_rate(debts) == 6.0

    def test_all_zero_debts(self) -> None:
        """Нулевой суммарный долг → 0"""
        debts = [{"debtUSD": 0, "interestRate": 5}, {"debtUSD": 0, "interestRate": 7}]
        assert calc_weighted_interest_rate(debts) == 0

    def test_generator_input(self) -> None:
        """Итератор читается один раз"""
        debts = ({"debtUSD": d, "interestRate": 4} for d in (10, 20, 30))
        assert calc_weighted_interest_rate(debts) == 4.0

    @pytest.mark.parametrize(
        "debt",
        [{"debtUSD": -1, "interestRate": 5}, {"debtUSD": 10}, 5, ("debtUSD", 10)],
    )
    def test_invalid_debt(self, debt) -> None:
        """Некорректный долг → InvalidArgument"""
        with pytest.raises(InvalidArgument, match="debt"):
            calc_weighted_interest_rate([debt])
