"""
Two's Complement — декодирование N-битных значений виртуальной машины

Цепочка отдаёт знаковые величины (например, тик пула) как беззнаковые
u32/u64. Модуль точно переводит int ↔ N-битный дополнительный код:

- to_unsigned_n: x mod 2^bits → [0, 2^bits - 1]
- to_signed_n:   то же, затем интерпретация старшего бита как знака
                 → [-2^(bits-1), 2^(bits-1) - 1]
- 32/64-битные специализации; для 32 бит есть быстрый путь по маске

Вход: int, десятичная/hex строка, float или Decimal. Дробная часть
отбрасывается к нулю ДО редукции (1.9 → 1, -1.9 → -1 → 0xFFFFFFFF).
Float нигде не используется в промежуточных вычислениях.
"""

from decimal import Decimal
from typing import Final, NamedTuple

from lendmath.core.math.numerical_safeguards import validate_positive_int
from lendmath.core.math.scaled import to_big_int

MASK_32: Final[int] = 0xFFFF_FFFF
SIGN_32: Final[int] = 0x8000_0000
FULL_32: Final[int] = 1 << 32


class _TwosComplementBits(NamedTuple):
    mask: int  # 2^bits - 1
    sign: int  # знаковый бит
    full: int  # 2^bits


def _tc_bits(bits: int) -> _TwosComplementBits:
    validate_positive_int(bits, "bits")
    full = 1 << bits
    return _TwosComplementBits(mask=full - 1, sign=1 << (bits - 1), full=full)


# =============================================================================
# N-BIT
# =============================================================================


def to_unsigned_n(value: int | str | float | Decimal, bits: int) -> int:
    """
    Беззнаковая N-битная проекция: value mod 2^bits.

    Raises:
        InvalidArgument: bits не положительное целое или value не целое-подобное

    Examples:
        >>> to_unsigned_n(-1, 8)
        255
        >>> to_unsigned_n(2**64 + 5, 64)
        5
    """
    tc = _tc_bits(bits)
    return to_big_int(value) & tc.mask


def to_signed_n(value: int | str | float | Decimal, bits: int) -> int:
    """
    Знаковая N-битная интерпретация (дополнительный код).

    Examples:
        >>> to_signed_n(255, 8)
        -1
        >>> to_signed_n(0x7F, 8)
        127
    """
    tc = _tc_bits(bits)
    unsigned = to_big_int(value) & tc.mask
    return unsigned - tc.full if unsigned & tc.sign else unsigned


# =============================================================================
# 32-BIT
# =============================================================================


def to_unsigned_int32(value: int | str | float | Decimal) -> int:
    """
    Беззнаковая 32-битная проекция.

    Быстрый путь для int: одна маска, без построения констант.

    Examples:
        >>> to_unsigned_int32(-1)
        4294967295
        >>> to_unsigned_int32(2**32 + 123)
        123
    """
    if type(value) is int:
        return value & MASK_32
    return to_unsigned_n(value, 32)


def to_int32(value: int | str | float | Decimal) -> int:
    """
    Знаковая 32-битная интерпретация.

    Examples:
        >>> to_int32(4294967295)
        -1
        >>> to_int32(2147483648)
        -2147483648
    """
    if type(value) is int:
        unsigned = value & MASK_32
        return unsigned - FULL_32 if unsigned & SIGN_32 else unsigned
    return to_signed_n(value, 32)


# =============================================================================
# 64-BIT
# =============================================================================


def to_unsigned_int64(value: int | str | float | Decimal) -> int:
    """Беззнаковая 64-битная проекция (точно за пределами 2^53)."""
    return to_unsigned_n(value, 64)


def to_int64(value: int | str | float | Decimal) -> int:
    """Знаковая 64-битная интерпретация (точно за пределами 2^53)."""
    return to_signed_n(value, 64)
