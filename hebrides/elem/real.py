"""
Real: a member of the reals as approximated by the numeric tower.

Real wraps one Number. Arithmetic defers to the Number promotion rules;
the transcendental functions are the tower's, with domain checks added.
Inverse trigonometric and hyperbolic functions return Angles and raise
DomainError where the result would not be real.
"""

from __future__ import annotations

import math
import operator
from typing import TYPE_CHECKING, Any, ClassVar, Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from hebrides.core.errors import DomainError
from hebrides.core.logging import get_context_logger

from .angle import Angle
from .kinds import NumericKind
from .number import Number
from .value import ElemValue, ValueRank, fuzzy_compare, resolve_tolerance

if TYPE_CHECKING:
    from .complex import Complex

logger = get_context_logger(__name__, value_type="Real")


class Real(BaseModel, ElemValue):
    """
    Real number value.

    Example:
        >>> Real(1).arcsin().to_radians() == PI / 2
        True
        >>> Real(2).arcsin()
        Traceback (most recent call last):
        ...
        hebrides.core.errors.DomainError: arcsin(2) is undefined: argument must be in [-1, 1]
    """

    model_config = ConfigDict(frozen=True)

    rank: ClassVar[ValueRank] = ValueRank.REAL

    number: Number = Field(description="The underlying tagged value")

    __hash__ = None

    def __init__(self, value: Any = 0, kind: Optional[NumericKind | str] = None, **kwargs):
        """
        Initialize a Real.

        Args:
            value: Real, Number, or Python/numpy scalar
            kind: Explicit representation for a scalar value (None = inferred)
        """
        if kind is not None:
            number = Number(kind, value.number if isinstance(value, Real) else value)
        elif isinstance(value, Real):
            number = value.number
        else:
            number = Number.of(value)
        super().__init__(number=number, **kwargs)

    @property
    def kind(self) -> NumericKind:
        return self.number.kind

    @property
    def value(self) -> Union[int, float]:
        return self.number.value

    # Conversions

    def to_python(self) -> Union[int, float]:
        return self.number.value

    def to_complex(self) -> Complex:
        from .complex import Complex

        return Complex(self.number, Number.zero(self.kind))

    def __float__(self) -> float:
        return float(self.number)

    def __int__(self) -> int:
        return int(self.number)

    def __bool__(self) -> bool:
        return bool(self.number)

    def to_string(self) -> str:
        return self.number.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Real({self.to_string()})"

    # Predicates

    def positive(self) -> bool:
        return self.number.positive()

    def negative(self) -> bool:
        return self.number.negative()

    def is_zero(self) -> bool:
        return self.number.is_zero()

    def is_nan(self) -> bool:
        return self.number.is_nan()

    def is_finite(self) -> bool:
        return self.number.is_finite()

    # Promotion

    def promote(self, other: ElemValue) -> ElemValue:
        """Promote Real to Complex."""
        from .complex import Complex

        if isinstance(other, Complex):
            return self.to_complex()
        return self

    def compare(
        self, other: Any, tolerance: Optional[float] = None, mode: Optional[str] = None
    ) -> bool:
        """Fuzzy comparison of real numbers."""
        if isinstance(other, ElemValue) and other.rank > self.rank:
            return other.compare(self, tolerance, mode)
        rhs = as_number(other)
        if rhs is None:
            return False
        tolerance, mode = resolve_tolerance(tolerance, mode)
        return fuzzy_compare(float(self.number), float(rhs), tolerance, mode)

    # Arithmetic

    def _binary(self, other: Any, op, reflected: bool = False) -> Real:
        rhs = as_number(other)
        if rhs is None:
            return NotImplemented
        if reflected:
            return Real(op(rhs, self.number))
        return Real(op(self.number, rhs))

    def __add__(self, other: Any) -> Real:
        return self._binary(other, operator.add)

    def __radd__(self, other: Any) -> Real:
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other: Any) -> Real:
        return self._binary(other, operator.sub)

    def __rsub__(self, other: Any) -> Real:
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other: Any) -> Real:
        return self._binary(other, operator.mul)

    def __rmul__(self, other: Any) -> Real:
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other: Any) -> Real:
        return self._binary(other, operator.truediv)

    def __rtruediv__(self, other: Any) -> Real:
        return self._binary(other, operator.truediv, reflected=True)

    def __pow__(self, other: Any) -> Real:
        """int exponents use powi, everything else the domain-checked powf."""
        if isinstance(other, (int, np.integer)):
            return self.powi(other)
        rhs = as_number(other)
        if rhs is None:
            return NotImplemented
        if rhs.kind.is_integer:
            return self.powi(rhs.value)
        return self.powf(rhs)

    def __rpow__(self, other: Any) -> Real:
        lhs = as_number(other)
        if lhs is None:
            return NotImplemented
        return Real(lhs) ** self

    def __neg__(self) -> Real:
        return Real(-self.number)

    def __pos__(self) -> Real:
        return self

    def __abs__(self) -> Real:
        return Real(abs(self.number))

    # Comparison

    def __eq__(self, other: Any) -> bool:
        rhs = as_number(other)
        if rhs is None:
            return NotImplemented
        return self.number == rhs

    def __lt__(self, other: Any) -> bool:
        rhs = as_number(other)
        if rhs is None:
            return NotImplemented
        return self.number < rhs

    def __le__(self, other: Any) -> bool:
        rhs = as_number(other)
        if rhs is None:
            return NotImplemented
        return self.number <= rhs

    def __gt__(self, other: Any) -> bool:
        rhs = as_number(other)
        if rhs is None:
            return NotImplemented
        return self.number > rhs

    def __ge__(self, other: Any) -> bool:
        rhs = as_number(other)
        if rhs is None:
            return NotImplemented
        return self.number >= rhs

    def partial_cmp(self, other: Any) -> Optional[int]:
        rhs = as_number(other)
        if rhs is None:
            raise TypeError(f"Cannot compare Real with {type(other).__name__}")
        return self.number.partial_cmp(rhs)

    # Domain checks

    def _require(self, valid: bool, operation: str, domain: str) -> None:
        if valid:
            return
        error = DomainError(operation, self.to_string(), domain)
        logger.debug(
            "%s", error.message, extra_data={"operation": operation, "argument": error.details["argument"]}
        )
        raise error

    # Total functions

    def exp(self) -> Real:
        return Real(self.number.exp())

    def powi(self, exponent: int) -> Real:
        return Real(self.number.powi(exponent))

    def sin(self) -> Real:
        return Real(self.number.sin())

    def cos(self) -> Real:
        return Real(self.number.cos())

    def tan(self) -> Real:
        return Real(self.number.tan())

    def sinh(self) -> Real:
        return Real(self.number.sinh())

    def cosh(self) -> Real:
        return Real(self.number.cosh())

    def tanh(self) -> Real:
        return Real(self.number.tanh())

    def squared(self) -> Real:
        """self * self, under the usual promotion rules."""
        return Real(self.number * self.number)

    def floor(self) -> Real:
        return Real(self.number.floor())

    def ceil(self) -> Real:
        return Real(self.number.ceil())

    # Domain-checked functions

    def powf(self, exponent: Any) -> Real:
        """
        Real power, always f64.

        Raises:
            DomainError: Negative base with a non-integral exponent
        """
        rhs = as_number(exponent)
        if rhs is None:
            raise TypeError(f"Cannot raise Real to {type(exponent).__name__}")
        integral = rhs.kind.is_integer or float(rhs).is_integer()
        self._require(not (self.number.negative() and not integral), "powf", "[0, inf) for non-integral exponents")
        return Real(self.number.powf(rhs))

    def sqrt(self) -> Real:
        """
        Square root as ``powf(0.5)``.

        Raises:
            DomainError: Negative (or nan) input
        """
        self._require(float(self) >= 0, "sqrt", "[0, inf)")
        return self.powf(0.5)

    def ln(self) -> Real:
        self._require(float(self) > 0, "ln", "(0, inf)")
        return Real(self.number.ln())

    def log(self, base: Any) -> Real:
        """
        Logarithm in ``base``.

        Raises:
            DomainError: Non-positive argument, or base not in (0, 1) ∪ (1, inf)
        """
        rhs = as_number(base)
        if rhs is None:
            raise TypeError(f"Cannot use {type(base).__name__} as a logarithm base")
        self._require(float(self) > 0, "log", "(0, inf)")
        base_value = float(rhs)
        if not (base_value > 0 and base_value != 1):
            error = DomainError("log base", rhs.to_string(), "(0, 1) ∪ (1, inf)")
            logger.debug("%s", error.message, extra_data={"operation": "log base", "argument": rhs.to_string()})
            raise error
        return Real(self.number.log(rhs))

    def log10(self) -> Real:
        self._require(float(self) > 0, "log10", "(0, inf)")
        return Real(self.number.log10())

    def log2(self) -> Real:
        self._require(float(self) > 0, "log2", "(0, inf)")
        return Real(self.number.log2())

    def arcsin(self) -> Angle:
        self._require(-1 <= float(self) <= 1, "arcsin", "[-1, 1]")
        return Angle.from_radians(self.number.arcsin())

    def arccos(self) -> Angle:
        self._require(-1 <= float(self) <= 1, "arccos", "[-1, 1]")
        return Angle.from_radians(self.number.arccos())

    def arctan(self) -> Angle:
        return Angle.from_radians(self.number.arctan())

    def arcsinh(self) -> Angle:
        return Angle.from_radians(self.number.arcsinh())

    def arccosh(self) -> Angle:
        self._require(float(self) >= 1, "arccosh", "[1, inf)")
        return Angle.from_radians(self.number.arccosh())

    def arctanh(self) -> Angle:
        self._require(-1 < float(self) < 1, "arctanh", "(-1, 1)")
        return Angle.from_radians(self.number.arctanh())


def as_number(value: Any) -> Optional[Number]:
    """Number behind a Real, Number or scalar; None for anything else."""
    if isinstance(value, Real):
        return value.number
    if isinstance(value, Number):
        return value
    if isinstance(value, (int, float, np.integer, np.floating)):
        return Number.of(value)
    return None


PI = Real(math.pi)
E = Real(math.e)
TAU = Real(math.tau)
