"""
Angle: a unitless angular quantity.

An Angle keeps the unit it was built with and derives the other unit on
demand. Inverse trigonometric functions on Real return Angles.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from hebrides.core.errors import InvariantError

from .number import Number
from .value import ElemValue, ValueRank, fuzzy_compare, resolve_tolerance

if TYPE_CHECKING:
    from .real import Real


class AngleUnit(str, Enum):
    """Unit an Angle was defined in."""

    RADIANS = "radians"
    DEGREES = "degrees"


_SUFFIX = {AngleUnit.RADIANS: "rad", AngleUnit.DEGREES: "deg"}


class Angle(BaseModel, ElemValue):
    """
    Angular quantity defined in radians or degrees.

    Only the defining measure is stored; ``to_radians()`` and
    ``to_degrees()`` compute the requested form on every call.
    """

    model_config = ConfigDict(frozen=True)

    rank: ClassVar[ValueRank] = ValueRank.ANGLE

    measure: Number = Field(description="The angle in its defining unit")
    unit: AngleUnit = Field(default=AngleUnit.RADIANS, description="The defining unit")

    __hash__ = None

    def __init__(self, measure: Any, unit: AngleUnit | str = AngleUnit.RADIANS, **kwargs):
        super().__init__(measure=_measure(measure), unit=unit, **kwargs)

    @classmethod
    def from_radians(cls, radians: Any) -> Angle:
        return cls(radians, AngleUnit.RADIANS)

    @classmethod
    def from_degrees(cls, degrees: Any) -> Angle:
        return cls(degrees, AngleUnit.DEGREES)

    # Unit conversion

    def _in(self, unit: AngleUnit) -> Number:
        if self.unit is unit:
            return self.measure
        if self.unit is AngleUnit.DEGREES:
            return self.measure * math.pi / 180
        if self.unit is AngleUnit.RADIANS:
            return self.measure * 180 / math.pi
        raise InvariantError(f"Angle has no defining unit: {self.unit!r}")

    def to_radians(self) -> Real:
        """Radian form (``d * pi / 180`` for degree angles)."""
        from .real import Real

        return Real(self._in(AngleUnit.RADIANS))

    def to_degrees(self) -> Real:
        """Degree form (``r * 180 / pi`` for radian angles)."""
        from .real import Real

        return Real(self._in(AngleUnit.DEGREES))

    def normalized(self) -> Angle:
        """Equivalent angle in [0, 2pi) radians or [0, 360) degrees."""
        full_turn = 360 if self.unit is AngleUnit.DEGREES else math.tau
        if self.measure.kind.is_integer and isinstance(full_turn, int):
            return Angle(Number.of(self.measure.value % full_turn), self.unit)
        folded = float(self.measure) % full_turn
        # tiny negative measures round up to a full turn
        if folded == full_turn:
            folded = 0.0
        return Angle(Number.f64(folded), self.unit)

    # Trigonometry of the angle

    def sin(self) -> Real:
        return self.to_radians().sin()

    def cos(self) -> Real:
        return self.to_radians().cos()

    def tan(self) -> Real:
        return self.to_radians().tan()

    # ElemValue protocol

    def promote(self, other: ElemValue) -> ElemValue:
        """Angles do not promote to other value types."""
        return self

    def compare(
        self, other: Any, tolerance: Optional[float] = None, mode: Optional[str] = None
    ) -> bool:
        """Fuzzy comparison of the radian forms."""
        if not isinstance(other, Angle):
            return False
        tolerance, mode = resolve_tolerance(tolerance, mode)
        return fuzzy_compare(
            float(self._in(AngleUnit.RADIANS)), float(other._in(AngleUnit.RADIANS)), tolerance, mode
        )

    def to_string(self) -> str:
        return f"{self.measure.to_string()} {_SUFFIX[self.unit]}"

    def to_python(self) -> float:
        """Radian form as a Python float."""
        return float(self._in(AngleUnit.RADIANS))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Angle({self.measure!r}, {self.unit.value})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        if self.unit is other.unit:
            return self.measure == other.measure
        return self._in(AngleUnit.RADIANS) == other._in(AngleUnit.RADIANS)

    # Arithmetic between angles; the result keeps the left operand's unit

    def __add__(self, other: Any) -> Angle:
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.measure + other._in(self.unit), self.unit)

    def __radd__(self, other: Any) -> Angle:
        return NotImplemented

    def __sub__(self, other: Any) -> Angle:
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.measure - other._in(self.unit), self.unit)

    def __rsub__(self, other: Any) -> Angle:
        return NotImplemented

    def __neg__(self) -> Angle:
        return Angle(-self.measure, self.unit)


def _measure(value: Any) -> Number:
    from .real import Real

    if isinstance(value, Real):
        return value.number
    return Number.of(value)
