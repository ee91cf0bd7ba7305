"""
Number: the tagged numeric value at the bottom of the value tower.

A Number holds exactly one of the eleven primitive kinds listed in
NumericKind. Arithmetic between kinds follows the promotion lattice in
``kinds``: integer results widen instead of wrapping, division always
produces a float, and transcendental functions always produce f64.

The tower never raises on mathematical domain violations. Results follow
IEEE-754 instead (nan, +-inf); Real layers the domain checks on top.
"""

from __future__ import annotations

import logging
import math
import operator
from typing import Any, Callable, ClassVar, Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from hebrides.core.config import get_settings

from .kinds import (
    NumericKind,
    common_kind,
    division_kind,
    float_result_kind,
    integer_result_kind,
)
from .value import ElemValue, ValueRank, fuzzy_compare, resolve_tolerance

logger = logging.getLogger(__name__)

Scalar = Union[int, float, np.integer, np.floating]


# IEEE-754 flavoured scalar primitives.
# The math module raises where C returns nan/inf; these return the C result.


def _is_odd_integer(y: float) -> bool:
    return y.is_integer() and abs(y) < 2**53 and int(y) % 2 == 1


def _ieee_divide(x: float, y: float) -> float:
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(1.0, x) * math.copysign(1.0, y) * math.inf
    return x / y


def _ieee_pow(x: float, y: float) -> float:
    y = float(y)
    if math.isfinite(x) and x < 0 and math.isfinite(y) and not y.is_integer():
        return math.nan
    if x == 0 and y < 0:
        return math.copysign(math.inf, x) if _is_odd_integer(y) else math.inf
    try:
        return math.pow(x, y)
    except OverflowError:
        negative = x < 0 and _is_odd_integer(y)
        return -math.inf if negative else math.inf


def _ieee_sqrt(x: float) -> float:
    return math.nan if x < 0 else math.sqrt(x)


def _ieee_exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _ieee_log(fn: Callable[[float], float]) -> Callable[[float], float]:
    def _log(x: float) -> float:
        if x == 0:
            return -math.inf
        if x < 0:
            return math.nan
        return fn(x)

    return _log


def _ieee_periodic(fn: Callable[[float], float]) -> Callable[[float], float]:
    def _periodic(x: float) -> float:
        return math.nan if math.isinf(x) else fn(x)

    return _periodic


def _ieee_unit_domain(fn: Callable[[float], float]) -> Callable[[float], float]:
    def _bounded(x: float) -> float:
        return math.nan if abs(x) > 1 else fn(x)

    return _bounded


def _ieee_sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _ieee_cosh(x: float) -> float:
    try:
        return math.cosh(x)
    except OverflowError:
        return math.inf


def _ieee_acosh(x: float) -> float:
    return math.nan if x < 1 else math.acosh(x)


def _ieee_atanh(x: float) -> float:
    if abs(x) > 1:
        return math.nan
    if abs(x) == 1:
        return math.copysign(math.inf, x)
    return math.atanh(x)


_ln = _ieee_log(math.log)
_log10 = _ieee_log(math.log10)
_log2 = _ieee_log(math.log2)
_sin = _ieee_periodic(math.sin)
_cos = _ieee_periodic(math.cos)
_tan = _ieee_periodic(math.tan)
_asin = _ieee_unit_domain(math.asin)
_acos = _ieee_unit_domain(math.acos)


def _coerce(kind: NumericKind, raw: Any) -> Union[int, float]:
    """Validate ``raw`` against ``kind`` and return its stored form."""
    if isinstance(raw, np.generic):
        raw = raw.item()
    if isinstance(raw, bool):
        raw = int(raw)

    if kind.is_float:
        if not isinstance(raw, (int, float)):
            raise ValueError(f"{kind.value} expects a real number, got {type(raw).__name__}")
        try:
            value = float(raw)
        except OverflowError as exc:
            raise ValueError(f"{raw} is out of range for {kind.value}") from exc
        if kind is NumericKind.F32:
            with np.errstate(over="ignore"):
                value = float(np.float32(value))
        return value

    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"{raw} is not integral; {kind.value} holds integers only")
        raw = int(raw)
    if not isinstance(raw, int):
        raise ValueError(f"{kind.value} expects an integer, got {type(raw).__name__}")
    if not kind.holds(raw):
        raise ValueError(f"{raw} is out of range for {kind.value} [{kind.min}, {kind.max}]")
    return raw


class Number(BaseModel, ElemValue):
    """
    Tagged primitive numeric value.

    Exactly one NumericKind is active; the value is immutable. Integer kinds
    store an exact Python int, float kinds a Python float (f32 values are
    rounded to single precision on construction).

    Example:
        >>> Number.u8(200) + Number.u8(200)
        Number.u16(400)
        >>> Number.i32(6) / Number.i32(3)
        Number.f32(2.0)
    """

    model_config = ConfigDict(frozen=True)

    rank: ClassVar[ValueRank] = ValueRank.NUMBER

    kind: NumericKind = Field(description="The active representation")
    value: Union[int, float] = Field(description="The value in that representation")

    __hash__ = None

    def __init__(self, kind: NumericKind | str, value: Any, **kwargs):
        """
        Initialize a Number.

        Args:
            kind: The representation to hold the value in
            value: Python or numpy scalar; must fit ``kind`` without loss
                (integer kinds reject fractional and out-of-range values)
        """
        super().__init__(kind=kind, value=value, **kwargs)

    @model_validator(mode="before")
    @classmethod
    def _coerce_value(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "kind" not in data:
            return data
        kind = NumericKind(data["kind"])
        return {**data, "kind": kind, "value": _coerce(kind, data.get("value"))}

    # Constructors

    @classmethod
    def of(cls, value: Any) -> Number:
        """
        Lift a Python or numpy scalar without loss.

        int → i64 (u64 above the i64 range), float → f64, numpy scalars keep
        their own width.
        """
        if isinstance(value, Number):
            return value
        if isinstance(value, np.generic):
            return cls(NumericKind.from_dtype(value.dtype), value)
        if isinstance(value, bool):
            value = int(value)
        if isinstance(value, int):
            if NumericKind.I64.holds(value):
                return cls(NumericKind.I64, value)
            return cls(NumericKind.U64, value)
        if isinstance(value, float):
            return cls(NumericKind.F64, value)
        raise TypeError(f"Cannot convert {type(value).__name__} to Number")

    @classmethod
    def zero(cls, kind: NumericKind | str = NumericKind.I64) -> Number:
        """Additive identity of ``kind``."""
        return cls(kind, 0)

    @classmethod
    def u8(cls, value: Scalar) -> Number:
        return cls(NumericKind.U8, value)

    @classmethod
    def u16(cls, value: Scalar) -> Number:
        return cls(NumericKind.U16, value)

    @classmethod
    def u32(cls, value: Scalar) -> Number:
        return cls(NumericKind.U32, value)

    @classmethod
    def u64(cls, value: Scalar) -> Number:
        return cls(NumericKind.U64, value)

    @classmethod
    def usize(cls, value: Scalar) -> Number:
        return cls(NumericKind.USIZE, value)

    @classmethod
    def i8(cls, value: Scalar) -> Number:
        return cls(NumericKind.I8, value)

    @classmethod
    def i16(cls, value: Scalar) -> Number:
        return cls(NumericKind.I16, value)

    @classmethod
    def i32(cls, value: Scalar) -> Number:
        return cls(NumericKind.I32, value)

    @classmethod
    def i64(cls, value: Scalar) -> Number:
        return cls(NumericKind.I64, value)

    @classmethod
    def f32(cls, value: Scalar) -> Number:
        return cls(NumericKind.F32, value)

    @classmethod
    def f64(cls, value: Scalar) -> Number:
        return cls(NumericKind.F64, value)

    # Conversions

    def to_python(self) -> Union[int, float]:
        """Convert to Python int or float."""
        return self.value

    def to_kind(self, kind: NumericKind | str) -> Number:
        """
        Convert to another kind without loss.

        Raises:
            ValueError: If the value does not survive the conversion
        """
        kind = NumericKind(kind)
        if kind is self.kind:
            return self
        converted = Number(kind, self.value)
        if not self.is_nan() and converted.value != self.value:
            raise ValueError(f"{self!r} cannot be represented as {kind.value} without loss")
        return converted

    def as_f64(self) -> Number:
        """Widen to f64 (lossy only for integers beyond 2**53)."""
        return Number(NumericKind.F64, float(self.value))

    def __float__(self) -> float:
        return float(self.value)

    def __int__(self) -> int:
        return int(self.value)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def to_string(self) -> str:
        """Decimal form of the value in its own representation."""
        if self.kind is NumericKind.F32:
            return str(np.float32(self.value))
        return repr(self.value)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Number.{self.kind.value}({self.to_string()})"

    # Predicates

    def positive(self) -> bool:
        """Strictly greater than zero in its own representation."""
        return self.value > 0

    def negative(self) -> bool:
        """Neither positive nor zero (nan is neither)."""
        return self.value < 0

    def is_zero(self) -> bool:
        return self.value == 0

    def is_nan(self) -> bool:
        return self.kind.is_float and math.isnan(self.value)

    def is_finite(self) -> bool:
        return self.kind.is_integer or math.isfinite(self.value)

    # Promotion

    def promote(self, other: ElemValue) -> ElemValue:
        """Promote a Number to Real or Complex."""
        from .complex import Complex
        from .real import Real

        if isinstance(other, Complex):
            return Complex(self, Number.zero(self.kind))
        if isinstance(other, Real):
            return Real(self)
        return self

    def compare(
        self, other: Any, tolerance: Optional[float] = None, mode: Optional[str] = None
    ) -> bool:
        """Fuzzy comparison with an explicit tolerance."""
        if isinstance(other, ElemValue) and other.rank > self.rank:
            return other.compare(self, tolerance, mode)
        rhs = _lift(other)
        if rhs is None:
            return False
        tolerance, mode = resolve_tolerance(tolerance, mode)
        return fuzzy_compare(float(self.value), float(rhs.value), tolerance, mode)

    # Arithmetic

    def _combine(self, other: Number, op: Callable[[Any, Any], Any], signed: bool = False) -> Number:
        if self.kind.is_float or other.kind.is_float:
            kind = float_result_kind(self.kind, other.kind)
            return Number(kind, op(float(self.value), float(other.value)))

        exact = op(self.value, other.value)
        kind = integer_result_kind(self.kind, other.kind, exact, signed=signed)
        if kind is None:
            logger.debug(
                "%s(%s, %s) overflows every integer kind; falling back to f64",
                op.__name__, self.kind.value, other.kind.value,
            )
            return Number(NumericKind.F64, float(exact))
        return Number(kind, exact)

    def _divide(self, other: Number) -> Number:
        kind = division_kind(self.kind, other.kind)
        return Number(kind, _ieee_divide(float(self.value), float(other.value)))

    def __add__(self, other: Any) -> Number:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        return self._combine(rhs, operator.add)

    def __radd__(self, other: Any) -> Number:
        lhs = _lift(other)
        if lhs is None:
            return NotImplemented
        return lhs._combine(self, operator.add)

    def __sub__(self, other: Any) -> Number:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        return self._combine(rhs, operator.sub, signed=True)

    def __rsub__(self, other: Any) -> Number:
        lhs = _lift(other)
        if lhs is None:
            return NotImplemented
        return lhs._combine(self, operator.sub, signed=True)

    def __mul__(self, other: Any) -> Number:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        return self._combine(rhs, operator.mul)

    def __rmul__(self, other: Any) -> Number:
        lhs = _lift(other)
        if lhs is None:
            return NotImplemented
        return lhs._combine(self, operator.mul)

    def __truediv__(self, other: Any) -> Number:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        return self._divide(rhs)

    def __rtruediv__(self, other: Any) -> Number:
        lhs = _lift(other)
        if lhs is None:
            return NotImplemented
        return lhs._divide(self)

    def __pow__(self, other: Any) -> Number:
        """int exponents use powi, everything else powf."""
        if isinstance(other, (int, np.integer)):
            return self.powi(other)
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        if rhs.kind.is_integer:
            return self.powi(rhs.value)
        return self.powf(rhs)

    def __rpow__(self, other: Any) -> Number:
        lhs = _lift(other)
        if lhs is None:
            return NotImplemented
        return lhs ** self

    def __neg__(self) -> Number:
        """Negation; integers widen to a signed kind instead of wrapping."""
        if self.kind.is_float:
            return Number(self.kind, -self.value)
        exact = -self.value
        kind = integer_result_kind(self.kind, self.kind, exact, signed=True)
        if kind is None:
            logger.debug("negating %r overflows every integer kind; falling back to f64", self)
            return Number(NumericKind.F64, float(exact))
        return Number(kind, exact)

    def __pos__(self) -> Number:
        return self

    def __abs__(self) -> Number:
        if self.kind.is_float:
            return Number(self.kind, abs(self.value))
        if self.value >= 0:
            return self
        return -self

    # Comparison

    def _approx_eq(self, other: Number) -> bool:
        kind = common_kind(self.kind, other.kind)
        if kind is None:
            return self.value == other.value
        x, y = float(self.value), float(other.value)
        if x == y:
            return True
        return abs(x - y) < kind.epsilon * get_settings().EPSILON_SCALE

    def _order(self, other: Number) -> Optional[int]:
        if self.is_nan() or other.is_nan():
            return None
        if self._approx_eq(other):
            return 0
        if common_kind(self.kind, other.kind) is None:
            return -1 if self.value < other.value else 1
        return -1 if float(self.value) < float(other.value) else 1

    def partial_cmp(self, other: Any) -> Optional[int]:
        """
        Three-way comparison through the common representation.

        Returns:
            -1, 0 or 1; None when the pair is unordered (nan involved)
        """
        rhs = _lift(other)
        if rhs is None:
            raise TypeError(f"Cannot compare Number with {type(other).__name__}")
        return self._order(rhs)

    def __eq__(self, other: Any) -> bool:
        """
        Approximate equality.

        Two integer kinds compare exactly; with a float involved the values
        are equal when they differ by less than the machine epsilon of the
        common float kind.
        """
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        return self._approx_eq(rhs)

    def __lt__(self, other: Any) -> bool:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        order = self._order(rhs)
        return order is not None and order < 0

    def __le__(self, other: Any) -> bool:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        order = self._order(rhs)
        return order is not None and order <= 0

    def __gt__(self, other: Any) -> bool:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        order = self._order(rhs)
        return order is not None and order > 0

    def __ge__(self, other: Any) -> bool:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        order = self._order(rhs)
        return order is not None and order >= 0

    # Exponentiation

    def powi(self, exponent: int) -> Number:
        """
        Integer power.

        Integer kinds stay in their own kind when the exact result fits and
        fall back to f64 otherwise (including negative exponents). Float
        kinds keep their kind.
        """
        exponent = operator.index(exponent)
        if self.kind.is_float:
            return Number(self.kind, _ieee_pow(float(self.value), exponent))

        base = self.value
        # |base| >= 2 ** (bit_length - 1), so a huge exponent overflows without computing it
        if exponent >= 0 and (abs(base) <= 1 or (abs(base).bit_length() - 1) * exponent <= 64):
            exact = base ** exponent
            if self.kind.holds(exact):
                return Number(self.kind, exact)
        logger.debug("%r.powi(%d) leaves %s; falling back to f64", self, exponent, self.kind.value)
        return Number(NumericKind.F64, _ieee_pow(float(base), exponent))

    def floor(self) -> Number:
        """
        Largest integral value not above self, in the same kind.

        Integer kinds are returned unchanged; nan and infinities pass through.
        """
        if self.kind.is_integer or not self.is_finite():
            return self
        return Number(self.kind, float(math.floor(self.value)))

    def ceil(self) -> Number:
        """Smallest integral value not below self, in the same kind."""
        if self.kind.is_integer or not self.is_finite():
            return self
        return Number(self.kind, float(math.ceil(self.value)))

    def powf(self, exponent: Any) -> Number:
        """Real power, always f64."""
        rhs = _lift(exponent)
        if rhs is None:
            raise TypeError(f"Cannot raise Number to {type(exponent).__name__}")
        return Number(NumericKind.F64, _ieee_pow(float(self.value), float(rhs.value)))

    # Transcendental primitives (always f64)

    def _f64(self, fn: Callable[[float], float]) -> Number:
        return Number(NumericKind.F64, fn(float(self.value)))

    def sqrt(self) -> Number:
        return self._f64(_ieee_sqrt)

    def exp(self) -> Number:
        return self._f64(_ieee_exp)

    def ln(self) -> Number:
        return self._f64(_ln)

    def log(self, base: Any) -> Number:
        """Logarithm in an arbitrary base: ln(self) / ln(base)."""
        rhs = _lift(base)
        if rhs is None:
            raise TypeError(f"Cannot use {type(base).__name__} as a logarithm base")
        return Number(NumericKind.F64, _ieee_divide(_ln(float(self.value)), _ln(float(rhs.value))))

    def log10(self) -> Number:
        return self._f64(_log10)

    def log2(self) -> Number:
        return self._f64(_log2)

    def sin(self) -> Number:
        return self._f64(_sin)

    def cos(self) -> Number:
        return self._f64(_cos)

    def tan(self) -> Number:
        return self._f64(_tan)

    def arcsin(self) -> Number:
        return self._f64(_asin)

    def arccos(self) -> Number:
        return self._f64(_acos)

    def arctan(self) -> Number:
        return self._f64(math.atan)

    def sinh(self) -> Number:
        return self._f64(_ieee_sinh)

    def cosh(self) -> Number:
        return self._f64(_ieee_cosh)

    def tanh(self) -> Number:
        return self._f64(math.tanh)

    def arcsinh(self) -> Number:
        return self._f64(math.asinh)

    def arccosh(self) -> Number:
        return self._f64(_ieee_acosh)

    def arctanh(self) -> Number:
        return self._f64(_ieee_atanh)


def _lift(value: Any) -> Optional[Number]:
    """Number for Numbers and scalars, None for anything else."""
    if isinstance(value, Number):
        return value
    if isinstance(value, (int, float, np.integer, np.floating)):
        return Number.of(value)
    return None
