"""
hebrides.elem - elementary numeric values

Value types with:
- A tagged numeric tower with non-wrapping promotion
- Domain-checked real functions
- Angles in radians or degrees
- Complex numbers in polar form
"""

from .angle import Angle, AngleUnit
from .complex import I, ONE, ZERO, Complex
from .kinds import NumericKind
from .number import Number
from .real import E, PI, TAU, Real
from .value import ElemValue, ToleranceMode, ValueRank, fuzzy_compare

__all__ = [
    "ElemValue",
    "ValueRank",
    "ToleranceMode",
    "fuzzy_compare",
    "NumericKind",
    "Number",
    "Real",
    "Angle",
    "AngleUnit",
    "Complex",
    "ZERO",
    "ONE",
    "I",
    "PI",
    "E",
    "TAU",
]
