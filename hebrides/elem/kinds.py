"""
Numeric kinds and the promotion lattice between them.

Every Number carries one NumericKind. The helpers at the bottom of this
module pick the result kind when two kinds are combined:

- integer results climb a ladder of widths until the exact value fits
- float results use f32 only when both operands fit f32 exactly
- division always produces a float
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np


class NumericKind(str, Enum):
    """The eleven primitive representations a Number can hold."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    USIZE = "usize"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"

    @property
    def dtype(self) -> np.dtype:
        return _DTYPES[self]

    @property
    def is_float(self) -> bool:
        return self.dtype.kind == "f"

    @property
    def is_integer(self) -> bool:
        return not self.is_float

    @property
    def is_signed(self) -> bool:
        return self.dtype.kind == "i"

    @property
    def is_unsigned(self) -> bool:
        return self.dtype.kind == "u"

    @property
    def bits(self) -> int:
        return self.dtype.itemsize * 8

    @property
    def min(self) -> int:
        """Smallest representable integer (integer kinds only)."""
        return int(np.iinfo(self.dtype).min)

    @property
    def max(self) -> int:
        """Largest representable integer (integer kinds only)."""
        return int(np.iinfo(self.dtype).max)

    @property
    def epsilon(self) -> float:
        """Machine epsilon (float kinds only)."""
        return float(np.finfo(self.dtype).eps)

    def holds(self, value: int) -> bool:
        """Check whether an exact integer fits this integer kind."""
        return self.min <= value <= self.max

    @classmethod
    def from_dtype(cls, dtype: np.dtype | type) -> NumericKind:
        """
        Map a numpy dtype onto a fixed-width kind.

        ``usize`` is never inferred: numpy's ``uintp`` is an alias of one of
        the fixed-width unsigned types, so it maps onto that type.
        """
        dtype = np.dtype(dtype)
        for kind in _FIXED_WIDTH:
            if kind.dtype == dtype:
                return kind
        raise TypeError(f"Unsupported numpy dtype: {dtype}")


_DTYPES = {
    NumericKind.U8: np.dtype(np.uint8),
    NumericKind.U16: np.dtype(np.uint16),
    NumericKind.U32: np.dtype(np.uint32),
    NumericKind.U64: np.dtype(np.uint64),
    NumericKind.USIZE: np.dtype(np.uintp),
    NumericKind.I8: np.dtype(np.int8),
    NumericKind.I16: np.dtype(np.int16),
    NumericKind.I32: np.dtype(np.int32),
    NumericKind.I64: np.dtype(np.int64),
    NumericKind.F32: np.dtype(np.float32),
    NumericKind.F64: np.dtype(np.float64),
}

_UNSIGNED_LADDER = (NumericKind.U8, NumericKind.U16, NumericKind.U32, NumericKind.U64)
_SIGNED_LADDER = (NumericKind.I8, NumericKind.I16, NumericKind.I32, NumericKind.I64)
_FIXED_WIDTH = _UNSIGNED_LADDER + _SIGNED_LADDER + (NumericKind.F32, NumericKind.F64)

# f32 has a 24-bit significand: integers of up to 16 bits convert exactly
_F32_EXACT_INT_BITS = 16


def _signed_width(kind: NumericKind) -> int:
    """Bits a signed kind needs to hold every value of ``kind``."""
    if kind.is_signed:
        return kind.bits
    return min(kind.bits * 2, 64)


def integer_result_kind(
    a: NumericKind, b: NumericKind, result: int, signed: bool = False
) -> Optional[NumericKind]:
    """
    Pick the integer kind for an exact integer result of ``a (op) b``.

    Two unsigned operands stay unsigned unless ``signed`` is requested
    (subtraction, negation); anything else goes through the signed ladder.
    The first kind at least as wide as both operands that holds ``result``
    wins.

    Returns:
        The result kind, or None when no integer kind holds the result
    """
    if a.is_unsigned and b.is_unsigned and not signed:
        width = max(a.bits, b.bits)
        candidates = [kind for kind in _UNSIGNED_LADDER if kind.bits >= width]
        if a is b is NumericKind.USIZE:
            candidates.insert(0, NumericKind.USIZE)
    else:
        width = max(_signed_width(a), _signed_width(b))
        candidates = [kind for kind in _SIGNED_LADDER if kind.bits >= width]

    for kind in candidates:
        if kind.holds(result):
            return kind
    return None


def float_result_kind(a: NumericKind, b: NumericKind) -> NumericKind:
    """
    Pick the float kind when at least one operand is a float.

    f32 survives only if the other side is f32 or an integer kind that f32
    represents exactly.
    """
    if NumericKind.F64 in (a, b):
        return NumericKind.F64
    for kind in (a, b):
        if kind.is_integer and kind.bits > _F32_EXACT_INT_BITS:
            return NumericKind.F64
    return NumericKind.F32


def division_kind(a: NumericKind, b: NumericKind) -> NumericKind:
    """Division always yields a float: f32 unless either side is 64-bit."""
    if a.bits < 64 and b.bits < 64:
        return NumericKind.F32
    return NumericKind.F64


def common_kind(a: NumericKind, b: NumericKind) -> Optional[NumericKind]:
    """
    Float kind two values are compared in, or None for two integer kinds.

    Integers compare exactly; anything involving a float compares in the
    float kind addition would produce.
    """
    if a.is_integer and b.is_integer:
        return None
    return float_result_kind(a, b)
