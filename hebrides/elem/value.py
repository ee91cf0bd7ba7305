"""
Base ElemValue class for the hebrides value types.

This module provides the foundation shared by Number, Real, Angle and Complex:
- Rank-based promotion between value types
- Operator overloading surface
- Explicit tolerance comparison
- Decimal string rendering
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, ClassVar, Optional

import numpy as np

from hebrides.core.config import get_settings


class ValueRank(IntEnum):
    """
    Promotion order between value types.

    Lower ranks promote to higher ranks when combined.
    """

    NUMBER = 0  # Tagged primitive numeric value
    REAL = 1  # Member of the reals
    ANGLE = 2  # Angular quantity (does not mix arithmetically with the others)
    COMPLEX = 3  # Member of the complex plane


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| / max(|a|, |b|) <= tol
    ABSOLUTE = "absolute"  # |a - b| <= tol
    SIGFIGS = "sigfigs"  # Significant figures


class ElemValue(ABC):
    """
    Base class for all hebrides value objects.

    Subclasses must implement:
    - rank: Class variable defining promotion order
    - All abstract methods

    Note: Concrete subclasses inherit from both BaseModel and ElemValue,
    e.g., `class Real(BaseModel, ElemValue):`. ElemValue itself does not
    inherit from BaseModel to avoid MRO conflicts.
    """

    rank: ClassVar[ValueRank]

    @abstractmethod
    def promote(self, other: ElemValue) -> ElemValue:
        """
        Promote this value to be compatible with another type.

        Returns:
            Promoted version of self (or self if no promotion needed)

        Example:
            Real(2).promote(Complex(1, 1)) → Complex(2, 0)
        """

    @abstractmethod
    def compare(
        self, other: Any, tolerance: Optional[float] = None, mode: Optional[str] = None
    ) -> bool:
        """
        Fuzzy comparison with an explicit tolerance.

        Args:
            other: Value to compare against
            tolerance: Tolerance (None = configured default)
            mode: Tolerance mode (None = configured default)

        Returns:
            True if values are equal within tolerance
        """

    @abstractmethod
    def to_string(self) -> str:
        """Convert to decimal string."""

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python native type."""

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_string()})"

    # Operator overloading

    @abstractmethod
    def __add__(self, other: Any) -> ElemValue:
        """Addition: self + other"""

    @abstractmethod
    def __radd__(self, other: Any) -> ElemValue:
        """Right addition: other + self"""

    @abstractmethod
    def __sub__(self, other: Any) -> ElemValue:
        """Subtraction: self - other"""

    @abstractmethod
    def __rsub__(self, other: Any) -> ElemValue:
        """Right subtraction: other - self"""

    @abstractmethod
    def __neg__(self) -> ElemValue:
        """Unary negation: -self"""

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # Helper methods for type promotion

    @classmethod
    def should_promote_to(cls, other_type: type[ElemValue]) -> bool:
        """Check if this type should promote to another type."""
        return cls.rank < other_type.rank

    def promote_types(self, other: ElemValue) -> tuple[ElemValue, ElemValue]:
        """
        Promote both values to a common type.

        Example:
            Real(2).promote_types(Complex(1, 1)) → (Complex(2, 0), Complex(1, 1))
        """
        if self.rank < other.rank:
            return self.promote(other), other
        elif other.rank < self.rank:
            return self, other.promote(self)
        else:
            return self, other

    @classmethod
    def from_python(cls, value: Any) -> ElemValue:
        """
        Convert a Python or numpy scalar to an ElemValue.

        Returns:
            Number for int, float and real numpy scalars; Complex for complex
        """
        from .complex import Complex
        from .number import Number

        if isinstance(value, ElemValue):
            return value
        if isinstance(value, (complex, np.complexfloating)):
            return Complex(value.real, value.imag)
        if isinstance(value, (int, float, np.integer, np.floating)):
            return Number.of(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to ElemValue")


def resolve_tolerance(tolerance: Optional[float], mode: Optional[str]) -> tuple[float, str]:
    """Fill in missing comparison parameters from the configured defaults."""
    settings = get_settings()
    if tolerance is None:
        tolerance = settings.COMPARE_TOLERANCE
    if mode is None:
        mode = settings.COMPARE_MODE
    return tolerance, mode


def fuzzy_compare(a: float, b: float, tolerance: float, mode: str) -> bool:
    """
    Compare two floats with tolerance.

    Args:
        a: First value
        b: Second value
        tolerance: Tolerance value
        mode: Comparison mode (relative, absolute, sigfigs)

    Returns:
        True if values are equal within tolerance
    """
    if a == b:
        return True
    if not (math.isfinite(a) and math.isfinite(b)):
        return False

    if mode == ToleranceMode.ABSOLUTE:
        return abs(a - b) <= tolerance

    elif mode == ToleranceMode.RELATIVE:
        # abs(a-b) / max(abs(a), abs(b)) <= tolerance
        max_abs = max(abs(a), abs(b))
        return abs(a - b) / max_abs <= tolerance

    elif mode == ToleranceMode.SIGFIGS:
        diff = abs(a - b)
        avg = (abs(a) + abs(b)) / 2
        return math.floor(math.log10(diff / avg)) < -tolerance

    else:
        raise ValueError(f"Unknown tolerance mode: {mode}")
