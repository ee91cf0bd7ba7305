"""
Complex: a member of the complex plane built from two Numbers.

The transcendental functions are written in terms of the complex
exponential, the principal logarithm and the azimuthal angle, so they stay
correct off the real axis. None of them raise DomainError: a real shortcut
is only taken where the real operation is defined (a positive real under a
logarithm, say), everything else goes through the general complex path.
"""

from __future__ import annotations

import math
import operator
from typing import Any, ClassVar, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from hebrides.core.errors import ConversionError
from hebrides.core.logging import get_context_logger

from .angle import Angle
from .number import Number
from .real import Real, as_number
from .value import ElemValue, ValueRank, fuzzy_compare, resolve_tolerance

logger = get_context_logger(__name__, value_type="Complex")

_ZERO = Number.f64(0.0)


class Complex(BaseModel, ElemValue):
    """
    Complex number value.

    Both parts are Numbers, so ``Complex(3, 4)`` holds two i64 parts and
    arithmetic on the parts follows the tower's promotion rules.

    Example:
        >>> Complex(3, 4).abs()
        Complex(5.0 + 0.0i)
        >>> Complex(1, 1) * Complex(1, 1)
        Complex(0 + 2i)
    """

    model_config = ConfigDict(frozen=True)

    rank: ClassVar[ValueRank] = ValueRank.COMPLEX

    real: Number = Field(description="The real part")
    imag: Number = Field(description="The imaginary part")

    __hash__ = None

    def __init__(self, real: Any = 0, imag: Any = 0, **kwargs):
        """
        Initialize a Complex number.

        Args:
            real: Real part (Real, Number, scalar), or a Python complex
            imag: Imaginary part (must be left at 0 when ``real`` is complex)
        """
        if isinstance(real, (complex, np.complexfloating)):
            if imag != 0:
                raise TypeError("imag cannot be combined with a complex real part")
            real, imag = float(real.real), float(real.imag)
        super().__init__(real=_part(real), imag=_part(imag), **kwargs)

    # Conversions

    def to_python(self) -> complex:
        return complex(float(self.real), float(self.imag))

    def to_real(self) -> Real:
        """
        Narrow to a Real.

        Raises:
            ConversionError: If the imaginary part is not approximately zero
        """
        if not self.is_real():
            error = ConversionError(self.to_string(), "Real", "imaginary part is not negligible")
            logger.debug("%s", error.message, extra_data={"operation": "to_real", "argument": error.details["value"]})
            raise error
        return Real(self.real)

    def to_string(self) -> str:
        if _sign_bit(self.imag):
            return f"{self.real.to_string()} - {abs(self.imag).to_string()}i"
        return f"{self.real.to_string()} + {self.imag.to_string()}i"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Complex({self.to_string()})"

    # Predicates

    def is_real(self) -> bool:
        """Imaginary part approximately zero."""
        return self.imag == 0

    def is_imaginary(self) -> bool:
        """Real part approximately zero."""
        return self.real == 0

    def is_nan(self) -> bool:
        return self.real.is_nan() or self.imag.is_nan()

    def is_finite(self) -> bool:
        return self.real.is_finite() and self.imag.is_finite()

    # Promotion

    def promote(self, other: ElemValue) -> ElemValue:
        """Complex is the top of the hierarchy."""
        return self

    def compare(
        self, other: Any, tolerance: Optional[float] = None, mode: Optional[str] = None
    ) -> bool:
        """Component-wise fuzzy comparison."""
        rhs = _lift(other)
        if rhs is None:
            return False
        tolerance, mode = resolve_tolerance(tolerance, mode)
        return fuzzy_compare(
            float(self.real), float(rhs.real), tolerance, mode
        ) and fuzzy_compare(float(self.imag), float(rhs.imag), tolerance, mode)

    def __eq__(self, other: Any) -> bool:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        return self.real == rhs.real and self.imag == rhs.imag

    # Field operations

    def _add(self, other: Complex) -> Complex:
        return Complex(self.real + other.real, self.imag + other.imag)

    def _sub(self, other: Complex) -> Complex:
        return Complex(self.real - other.real, self.imag - other.imag)

    def _mul(self, other: Complex) -> Complex:
        # (a + bi)(c + di) = (ac - bd) + (ad + bc)i
        a, b, c, d = self.real, self.imag, other.real, other.imag
        return Complex(a * c - b * d, a * d + b * c)

    def _div(self, other: Complex) -> Complex:
        # (a + bi) / (c + di) = [(ac + bd) + (bc - ad)i] / (c^2 + d^2)
        a, b, c, d = self.real, self.imag, other.real, other.imag
        denom = c * c + d * d
        return Complex((a * c + b * d) / denom, (b * c - a * d) / denom)

    def _binary(self, other: Any, op, reflected: bool = False) -> Complex:
        rhs = _lift(other)
        if rhs is None:
            return NotImplemented
        if reflected:
            return op(rhs, self)
        return op(self, rhs)

    def __add__(self, other: Any) -> Complex:
        return self._binary(other, Complex._add)

    def __radd__(self, other: Any) -> Complex:
        return self._binary(other, Complex._add, reflected=True)

    def __sub__(self, other: Any) -> Complex:
        return self._binary(other, Complex._sub)

    def __rsub__(self, other: Any) -> Complex:
        return self._binary(other, Complex._sub, reflected=True)

    def __mul__(self, other: Any) -> Complex:
        return self._binary(other, Complex._mul)

    def __rmul__(self, other: Any) -> Complex:
        return self._binary(other, Complex._mul, reflected=True)

    def __truediv__(self, other: Any) -> Complex:
        return self._binary(other, Complex._div)

    def __rtruediv__(self, other: Any) -> Complex:
        return self._binary(other, Complex._div, reflected=True)

    def __pow__(self, other: Any) -> Complex:
        """int → powi, real → powf, complex → pow."""
        if isinstance(other, (int, np.integer)):
            return self.powi(other)
        if isinstance(other, (Complex, complex, np.complexfloating)):
            exponent = _lift(other)
            if exponent.is_real():
                return self.powf(exponent.real)
            return self.pow(exponent)
        rhs = as_number(other)
        if rhs is None:
            return NotImplemented
        if rhs.kind.is_integer:
            return self.powi(rhs.value)
        return self.powf(rhs)

    def __rpow__(self, other: Any) -> Complex:
        lhs = _lift(other)
        if lhs is None:
            return NotImplemented
        return lhs ** self

    def __neg__(self) -> Complex:
        return Complex(-self.real, -self.imag)

    def __pos__(self) -> Complex:
        return self

    def __abs__(self) -> Complex:
        return self.abs()

    def conjugate(self) -> Complex:
        return Complex(self.real, -self.imag)

    def squared(self) -> Complex:
        return self * self

    def _times_i(self) -> Complex:
        return Complex(-self.imag, self.real)

    def _times_neg_i(self) -> Complex:
        return Complex(self.imag, -self.real)

    # Polar form

    def norm(self) -> Real:
        """Modulus sqrt(re² + im²)."""
        return Real((self.real * self.real + self.imag * self.imag).sqrt())

    def abs(self) -> Complex:
        """Modulus as a Complex on the real axis."""
        return Complex(self.norm(), _ZERO)

    def azimuth(self) -> Angle:
        """
        Azimuthal angle (argument) in radians, by quadrant.

        Points on the axes map to 0, pi/2, pi and 3pi/2 (the origin maps to
        pi). Off the axes the angle is built from arcsin(im / |z|):
        quadrants I and II land in (0, pi), quadrant III in (pi, 3pi/2), and
        quadrant IV in (-pi/2, 0). The range is therefore not a single
        [0, 2pi) or (-pi, pi] interval; callers needing one normalize it.
        """
        re, im = self.real, self.imag
        if im == 0:
            return Angle.from_radians(0.0 if re.positive() else math.pi)
        if re == 0:
            return Angle.from_radians(math.pi / 2 if im.positive() else 3 * math.pi / 2)

        ratio = _clamp_unit(im / self.norm().number)
        if re.positive() and im.positive():
            theta = ratio.arcsin()
        elif im.positive():
            theta = math.pi - ratio.arcsin()
        elif re.positive():
            theta = ratio.arcsin()
        else:
            theta = math.pi + (-ratio).arcsin()
        return Angle.from_radians(theta)

    def arg(self) -> Real:
        """Azimuthal angle in radians as a Real."""
        return self.azimuth().to_radians()

    # Exponential and logarithm

    def exp(self) -> Complex:
        """exp(a + bi) = exp(a) · (cos b + i sin b)."""
        return Complex(self.real.exp(), _ZERO) * Complex(self.imag.cos(), self.imag.sin())

    def ln(self) -> Complex:
        """
        Principal natural logarithm.

        Positive reals take the real logarithm; everything else (negative
        reals and the origin included) is ln|z| + i·arg(z).
        """
        if self.is_real() and self.real.positive():
            return Complex(Real(self.real).ln(), _ZERO)
        return Complex(self.norm().number.ln(), self.arg())

    # Powers and roots

    def powf(self, exponent: Any) -> Complex:
        """
        Real power |z|^n · (cos nθ + i sin nθ).

        Reals with a defined real power (non-negative base, or integral
        exponent) use real exponentiation.
        """
        n = as_number(exponent)
        if n is None:
            raise TypeError(f"Cannot raise Complex to {type(exponent).__name__}")
        integral = n.kind.is_integer or float(n).is_integer()
        if self.is_real() and (self.real.positive() or self.real.is_zero() or integral):
            return Complex(Real(self.real).powf(n), _ZERO)

        magnitude = self.norm().number.powf(n)
        angle = self.arg().number * n
        return Complex(magnitude * angle.cos(), magnitude * angle.sin())

    def powi(self, exponent: int) -> Complex:
        """Integer power by repeated squaring (exact for integer parts)."""
        exponent = operator.index(exponent)
        if exponent == 0:
            return ONE
        base = self if exponent > 0 else ONE / self
        remaining = abs(exponent)
        result = None
        while True:
            if remaining & 1:
                result = base if result is None else result * base
            remaining >>= 1
            if not remaining:
                return result
            base = base * base

    def pow(self, exponent: Any) -> Complex:
        """Complex power exp(w · ln z)."""
        w = _lift(exponent)
        if w is None:
            raise TypeError(f"Cannot raise Complex to {type(exponent).__name__}")
        return (w * self.ln()).exp()

    def sqrt(self) -> Complex:
        return self.powf(0.5)

    def root(self, n: int) -> Complex:
        """Principal n-th root."""
        n = operator.index(n)
        if n == 0:
            raise ValueError("root index must be nonzero")
        return self.powf(1 / n)

    def roots(self, n: int) -> list[Complex]:
        """All n n-th roots, counter-clockwise from the principal one."""
        n = operator.index(n)
        if n < 1:
            raise ValueError("root count must be positive")
        magnitude = self.norm().number.powf(1 / n)
        theta = self.arg().number
        result = []
        for k in range(n):
            angle = (theta + math.tau * k) / n
            result.append(Complex(magnitude * angle.cos(), magnitude * angle.sin()))
        return result

    # Trigonometric and hyperbolic functions

    def sin(self) -> Complex:
        """sin z = (e^{iz} - e^{-iz}) / 2i"""
        iz = self._times_i()
        return (iz.exp() - (-iz).exp()) / _TWO_I

    def cos(self) -> Complex:
        """cos z = (e^{iz} + e^{-iz}) / 2"""
        iz = self._times_i()
        return (iz.exp() + (-iz).exp()) / 2

    def tan(self) -> Complex:
        return self.sin() / self.cos()

    def sinh(self) -> Complex:
        """sinh z = (e^z - e^{-z}) / 2"""
        return (self.exp() - (-self).exp()) / 2

    def cosh(self) -> Complex:
        """cosh z = (e^z + e^{-z}) / 2"""
        return (self.exp() + (-self).exp()) / 2

    def tanh(self) -> Complex:
        return self.sinh() / self.cosh()

    # Inverse functions. These return Complex even for real input.

    def arcsin(self) -> Complex:
        """arcsin z = -i · ln(iz + sqrt(1 - z²))"""
        root = (ONE - self * self).sqrt()
        return (self._times_i() + root).ln()._times_neg_i()

    def arccos(self) -> Complex:
        """arccos z = -i · ln(z + i · sqrt(1 - z²))"""
        root = (ONE - self * self).sqrt()
        return (self + root._times_i()).ln()._times_neg_i()

    def arctan(self) -> Complex:
        """arctan z = (i/2) · (ln(1 - iz) - ln(1 + iz))"""
        iz = self._times_i()
        return ((ONE - iz).ln() - (ONE + iz).ln())._times_i() / 2

    def arcsinh(self) -> Complex:
        """arcsinh z = ln(z + sqrt(z² + 1))"""
        return (self + (self * self + ONE).sqrt()).ln()

    def arccosh(self) -> Complex:
        """arccosh z = ln(z + sqrt(z + 1) · sqrt(z - 1))"""
        return (self + (self + ONE).sqrt() * (self - ONE).sqrt()).ln()

    def arctanh(self) -> Complex:
        """arctanh z = (ln(1 + z) - ln(1 - z)) / 2"""
        return ((ONE + self).ln() - (ONE - self).ln()) / 2


def _part(value: Any) -> Number:
    number = as_number(value)
    if number is None:
        raise TypeError(f"Cannot use {type(value).__name__} as a complex component")
    return number


def _sign_bit(part: Number) -> bool:
    """Negative, counting -0.0 as negative."""
    if part.kind.is_float:
        return math.copysign(1.0, part.value) < 0
    return part.negative()


def _lift(value: Any) -> Optional[Complex]:
    """Complex for Complex, Real, Number and scalars; None for anything else."""
    if isinstance(value, Complex):
        return value
    if isinstance(value, (complex, np.complexfloating)):
        return Complex(value)
    number = as_number(value)
    if number is None:
        return None
    return Complex(number, Number.zero(number.kind))


def _clamp_unit(ratio: Number) -> Number:
    """Clamp into [-1, 1] so rounding cannot push arcsin out of its domain."""
    if ratio > 1:
        return Number.f64(1.0)
    if ratio < -1:
        return Number.f64(-1.0)
    return ratio


ZERO = Complex(0, 0)
ONE = Complex(1, 0)
I = Complex(0, 1)
_TWO_I = Complex(0, 2)
