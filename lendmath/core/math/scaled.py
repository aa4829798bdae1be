"""
Scaled Integers — арифметика фиксированной точности над int

Все величины леджера (балансы, цены, ставки) хранятся как целые числа,
масштабированные на 10^decimals. Модуль даёт примитивы, которые
воспроизводят целочисленную арифметику контракта бит-в-бит:

- Нормализация входа (int / десятичная строка / float / Decimal) → int
- Деление и mul-div с ОДНИМ округлением и выбираемым режимом
- Масштабирование/демасштабирование десятичных значений
- Целая степень в фиксированной точке (square-and-multiply с guard-цифрами)
- Логарифм по произвольному основанию (бинарный log2 через MSB и
  итеративное возведение в квадрат, ≥96 guard-бит)
- Округление до шага и clamp для целых

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Промежуточных делений нет: a*b/d считается одной операцией
2. Float никогда не участвует в вычислениях выше 2^53
3. Смешивание decimals не происходит неявно — rescale делает вызывающий

ФОРМУЛЫ:
    mul_div_round(a, b, d) = round(a * b / d)
    div_scaled(a, b, k)    = round(a * 10^k / b)
    log_b(x)               = log2(x) / log2(b)
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Final, NamedTuple

from lendmath.core.errors import InvalidArgument
from lendmath.core.math.numerical_safeguards import (
    is_valid_float,
    validate_int,
    validate_non_negative_int,
    validate_positive_int,
)

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Дополнительные двоичные разряды для log2 сверх разрядности scale
LOG_GUARD_BITS: Final[int] = 96

# Дополнительные десятичные цифры для pow_int_scaled (30 цифр ≈ 99 бит)
POW_GUARD_DIGITS: Final[int] = 30

# log2(10) сверху, в тысячных: ceil(k * log2(10)) <= (k * 3322 + 999) // 1000
_LOG2_10_MILLI: Final[int] = 3322


# =============================================================================
# ТИПЫ
# =============================================================================


class RoundingMode(str, Enum):
    """Режим округления для целочисленного деления."""

    TRUNC = "trunc"  # к нулю
    FLOOR = "floor"  # к -inf
    CEIL = "ceil"  # к +inf
    UP = "up"  # от нуля
    HALF_UP = "half_up"  # к ближайшему, половина → +inf
    HALF_AWAY_ZERO = "half_away_zero"  # к ближайшему, половина → от нуля
    HALF_EVEN = "half_even"  # банковское округление


class LogBase(NamedTuple):
    """Предвычисленный log2 основания в двоичной фиксированной точке."""

    base_scaled: int  # основание, масштабированное на 10^decimals
    decimals: int
    frac_bits: int  # число дробных бит в log2_base
    log2_base: int  # log2(base) * 2^frac_bits


# =============================================================================
# НОРМАЛИЗАЦИЯ ВХОДА
# =============================================================================


def to_big_int(value: int | str | float | Decimal) -> int:
    """
    Приведение целочисленного значения к int.

    Принимает int, десятичную строку (со знаком, с `_`, либо `0x…`),
    float и Decimal. Дробная часть отбрасывается к нулю (1.9 → 1, -1.9 → -1).

    Raises:
        InvalidArgument: bool, NaN/Inf, пустая или нечисловая строка,
            неподдерживаемый тип
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"boolean is not an integer value: {value!r}")

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if not is_valid_float(value):
            raise InvalidArgument(f"value must be finite, got {value!r}")
        return int(value)

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidArgument(f"value must be finite, got {value!r}")
        return int(value)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidArgument("value must be a non-empty string")

        unsigned = text.lstrip("+-")
        if unsigned[:2].lower() == "0x":
            try:
                return int(text, 16)
            except ValueError as exc:
                raise InvalidArgument(f"invalid hex integer: {value!r}") from exc

        try:
            return int(text)
        except ValueError:
            pass

        try:
            parsed = Decimal(text)
        except InvalidOperation as exc:
            raise InvalidArgument(f"invalid integer string: {value!r}") from exc

        if not parsed.is_finite():
            raise InvalidArgument(f"value must be finite, got {value!r}")
        return int(parsed)

    raise InvalidArgument(f"unsupported integer type: {type(value).__name__}")


def _to_decimal(value: int | str | float | Decimal) -> Decimal:
    if isinstance(value, bool):
        raise InvalidArgument(f"boolean is not a numeric value: {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # repr даёт кратчайшую запись: 0.1 → "0.1"
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise InvalidArgument(f"invalid decimal string: {value!r}") from exc
    else:
        raise InvalidArgument(f"unsupported numeric type: {type(value).__name__}")

    if not result.is_finite():
        raise InvalidArgument(f"value must be finite, got {value!r}")
    return result


# =============================================================================
# ДЕЛЕНИЕ С ОКРУГЛЕНИЕМ
# =============================================================================


def pow10(n: int) -> int:
    """10^n для n >= 0."""
    validate_non_negative_int(n, "exponent")
    return 10**n


def div_round(numerator: int, denominator: int, mode: RoundingMode = RoundingMode.TRUNC) -> int:
    """
    Целочисленное деление с одним округлением по режиму `mode`.

    Точно для любых знаков: сначала считается floor-частное и остаток,
    затем выбирается floor или floor + 1.

    Raises:
        InvalidArgument: если denominator == 0

    Examples:
        >>> div_round(7, 2, RoundingMode.HALF_EVEN)
        4
        >>> div_round(-7, 2, RoundingMode.TRUNC)
        -3
        >>> div_round(-5, 2, RoundingMode.HALF_AWAY_ZERO)
        -3
    """
    if denominator == 0:
        raise InvalidArgument("division by zero")

    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    quotient, remainder = divmod(numerator, denominator)
    if remainder == 0:
        return quotient

    negative = numerator < 0
    mode = RoundingMode(mode)

    if mode is RoundingMode.FLOOR:
        return quotient
    if mode is RoundingMode.CEIL:
        return quotient + 1
    if mode is RoundingMode.TRUNC:
        return quotient + 1 if negative else quotient
    if mode is RoundingMode.UP:
        return quotient if negative else quotient + 1

    twice = 2 * remainder
    if twice < denominator:
        return quotient
    if twice > denominator:
        return quotient + 1

    # ровно половина
    if mode is RoundingMode.HALF_UP:
        return quotient + 1
    if mode is RoundingMode.HALF_AWAY_ZERO:
        return quotient if negative else quotient + 1
    return quotient if quotient % 2 == 0 else quotient + 1


def mul_div_round(
    a: int,
    b: int,
    denominator: int,
    mode: RoundingMode = RoundingMode.TRUNC,
) -> int:
    """
    a * b / denominator с единственным округлением.

    Произведение считается целиком (int произвольной точности), промежуточного
    деления нет — ошибка округления не накапливается.
    """
    return div_round(a * b, denominator, mode)


# =============================================================================
# МАСШТАБИРОВАНИЕ
# =============================================================================


def to_scaled(
    value: int | str | float | Decimal,
    decimals: int,
    mode: RoundingMode = RoundingMode.TRUNC,
) -> int:
    """
    Десятичное значение → int, масштабированный на 10^decimals.

    Точно для строк и Decimal; float берётся по кратчайшему repr.
    Лишние знаки отбрасываются по `mode` (default: к нулю).

    Examples:
        >>> to_scaled("1.0001", 4)
        10001
        >>> to_scaled(4.36716153, 8)
        436716153
        >>> to_scaled("-0.125", 2, RoundingMode.HALF_AWAY_ZERO)
        -13
    """
    validate_non_negative_int(decimals, "decimals")
    sign, digits, exponent = _to_decimal(value).as_tuple()

    coefficient = int("".join(map(str, digits))) if digits else 0
    if sign:
        coefficient = -coefficient

    shift = exponent + decimals
    if shift >= 0:
        return coefficient * pow10(shift)
    return div_round(coefficient, pow10(-shift), mode)


def from_scaled(
    value: int,
    decimals: int,
    out_decimals: int | None = None,
    mode: RoundingMode = RoundingMode.TRUNC,
) -> Decimal | int:
    """
    Обратное к to_scaled.

    Без out_decimals возвращает точный Decimal (value / 10^decimals).
    С out_decimals возвращает int, масштабированный на 10^out_decimals,
    округлённый по `mode`; out_decimals=0 даёт целую часть.

    Examples:
        >>> from_scaled(436716153, 8)
        Decimal('4.36716153')
        >>> from_scaled(-313135, 1, 0)
        -31313
    """
    validate_non_negative_int(decimals, "decimals")
    value = to_big_int(value)

    if out_decimals is None:
        magnitude = abs(value)
        digits = tuple(int(ch) for ch in str(magnitude))
        return Decimal((1 if value < 0 else 0, digits, -decimals))

    validate_non_negative_int(out_decimals, "out_decimals")
    if out_decimals >= decimals:
        return value * pow10(out_decimals - decimals)
    return div_round(value, pow10(decimals - out_decimals), mode)


def div_scaled(a: int, b: int, decimals: int, mode: RoundingMode = RoundingMode.TRUNC) -> int:
    """Частное двух величин с одинаковыми decimals, масштабированное на 10^decimals."""
    return mul_div_round(a, pow10(decimals), b, mode)


def mul_scaled(a: int, b: int, decimals: int, mode: RoundingMode = RoundingMode.TRUNC) -> int:
    """Произведение двух величин с одинаковыми decimals в той же шкале."""
    return mul_div_round(a, b, pow10(decimals), mode)


# =============================================================================
# СТЕПЕНЬ
# =============================================================================


def pow_int_scaled(
    base: int,
    exponent: int,
    decimals: int,
    mode: RoundingMode = RoundingMode.TRUNC,
    guard_digits: int = POW_GUARD_DIGITS,
) -> int:
    """
    base^exponent в фиксированной точке (base и результат в шкале 10^decimals).

    Square-and-multiply на рабочей точности decimals + guard_digits,
    одно финальное округление по `mode`. Для exponent < 0 сначала
    обращается основание.

    Raises:
        InvalidArgument: base == 0 при отрицательной степени

    Examples:
        >>> pow_int_scaled(15000, 2, 4)  # 1.5^2
        22500
        >>> pow_int_scaled(20000, -1, 4)  # 2^-1
        5000
    """
    validate_non_negative_int(decimals, "decimals")
    validate_non_negative_int(guard_digits, "guard_digits")
    base = to_big_int(base)
    exponent = to_big_int(exponent)

    if exponent == 0:
        return pow10(decimals)
    if base == 0:
        if exponent < 0:
            raise InvalidArgument("zero base cannot be raised to a negative power")
        return 0

    work_one = pow10(decimals + guard_digits)
    factor = base * pow10(guard_digits)

    if exponent < 0:
        factor = div_round(work_one * work_one, factor, RoundingMode.HALF_EVEN)

    result = work_one
    remaining = abs(exponent)
    while remaining:
        if remaining & 1:
            result = div_round(result * factor, work_one, RoundingMode.HALF_EVEN)
        remaining >>= 1
        if remaining:
            factor = div_round(factor * factor, work_one, RoundingMode.HALF_EVEN)

    return div_round(result, pow10(guard_digits), mode)


# =============================================================================
# ЛОГАРИФМ
# =============================================================================


def frac_bits_for(decimals: int, guard_bits: int = LOG_GUARD_BITS) -> int:
    """Число дробных бит log2: разрядность 10^decimals плюс guard_bits."""
    validate_non_negative_int(decimals, "decimals")
    validate_non_negative_int(guard_bits, "guard_bits")
    return (decimals * _LOG2_10_MILLI + 999) // 1000 + guard_bits


def _log2_fixed(value: int, decimals: int, frac_bits: int) -> int:
    # value / 10^decimals в двоичную фиксированную точку
    fixed = (value << frac_bits) // pow10(decimals)
    if fixed <= 0:
        raise InvalidArgument(f"value {value} is below the log2 resolution")

    msb = fixed.bit_length() - 1
    if msb >= frac_bits:
        mantissa = fixed >> (msb - frac_bits)
    else:
        mantissa = fixed << (frac_bits - msb)

    # целая часть log2, затем по одному дробному биту за возведение в квадрат
    result = (msb - frac_bits) << frac_bits
    two = 2 << frac_bits
    bit = 1 << (frac_bits - 1)
    while bit:
        mantissa = (mantissa * mantissa) >> frac_bits
        if mantissa >= two:
            mantissa >>= 1
            result += bit
        bit >>= 1

    return result


def log2_scaled(
    value: int,
    decimals: int,
    guard_bits: int = LOG_GUARD_BITS,
) -> tuple[int, int]:
    """
    log2 положительного масштабированного значения.

    Returns:
        (log2_fixed, frac_bits): log2(value / 10^decimals) * 2^frac_bits
        (округление к -inf) и число дробных бит

    Raises:
        InvalidArgument: value <= 0

    Examples:
        >>> log2_scaled(800, 2, guard_bits=8)  # log2(8.00) = 3
        (98304, 15)
    """
    value = to_big_int(value)
    if value <= 0:
        raise InvalidArgument(f"log2 is undefined for non-positive value {value}")

    frac_bits = frac_bits_for(decimals, guard_bits)
    return _log2_fixed(value, decimals, frac_bits), frac_bits


def precompute_log_base(
    base: int | str | float | Decimal,
    decimals: int,
    guard_bits: int = LOG_GUARD_BITS,
) -> LogBase:
    """
    Предвычисление log2 основания для многократного log_base_scaled.

    Raises:
        InvalidArgument: base <= 0 или base == 1 (log2(base) == 0)
    """
    base_scaled = to_scaled(base, decimals)
    if base_scaled <= 0:
        raise InvalidArgument(f"log base must be positive, got {base!r}")

    log2_base, frac_bits = log2_scaled(base_scaled, decimals, guard_bits)
    if log2_base == 0:
        raise InvalidArgument("log base must not be 1")

    return LogBase(
        base_scaled=base_scaled,
        decimals=decimals,
        frac_bits=frac_bits,
        log2_base=log2_base,
    )


def log_base_scaled(
    value: int,
    decimals: int,
    log_base: LogBase,
    mode: RoundingMode = RoundingMode.TRUNC,
) -> int:
    """
    log_b(value / 10^decimals), результат масштабирован на 10^decimals.

    Change of base: log2(value) / log2(base). Оба логарифма приводятся к
    общему числу дробных бит (не меньше разрядности decimals + 96).

    Raises:
        InvalidArgument: value <= 0
    """
    validate_non_negative_int(decimals, "decimals")
    value = to_big_int(value)
    if value <= 0:
        raise InvalidArgument(f"logarithm is undefined for non-positive value {value}")

    frac_bits = max(log_base.frac_bits, frac_bits_for(decimals))
    log2_value = _log2_fixed(value, decimals, frac_bits)
    log2_base = log_base.log2_base << (frac_bits - log_base.frac_bits)

    return mul_div_round(log2_value, pow10(decimals), log2_base, mode)


# =============================================================================
# ЦЕЛОЧИСЛЕННЫЕ УТИЛИТЫ
# =============================================================================


def round_int_by_step(value: int, step: int, mode: RoundingMode = RoundingMode.HALF_AWAY_ZERO) -> int:
    """
    Округление value до кратного step.

    Examples:
        >>> round_int_by_step(-31313, 5)
        -31315
        >>> round_int_by_step(125, 10, RoundingMode.HALF_EVEN)
        120
    """
    validate_positive_int(step, "step")
    return div_round(to_big_int(value), step, mode) * step


def clamp_int(value: int, lower: int, upper: int) -> int:
    """
    Ограничение целого значения диапазоном [lower, upper].

    Raises:
        InvalidArgument: lower > upper
    """
    validate_int(lower, "lower")
    validate_int(upper, "upper")
    if lower > upper:
        raise InvalidArgument(f"lower bound {lower} exceeds upper bound {upper}")
    return max(lower, min(upper, value))
