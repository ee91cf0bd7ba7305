"""hebrides - numeric tower, reals, angles and complex numbers.

Main namespace package:
- hebrides.elem: Value types (Number, Real, Angle, Complex)
- hebrides.core: Settings, logging and errors
"""

from .core import (
    ConversionError,
    DomainError,
    HebridesError,
    InvariantError,
    Settings,
    get_settings,
    setup_logging,
)
from .elem import (
    E,
    I,
    ONE,
    PI,
    TAU,
    ZERO,
    Angle,
    AngleUnit,
    Complex,
    ElemValue,
    Number,
    NumericKind,
    Real,
    ToleranceMode,
    ValueRank,
    fuzzy_compare,
)

__version__ = "0.1.0"

__all__ = [
    "Number",
    "NumericKind",
    "Real",
    "Angle",
    "AngleUnit",
    "Complex",
    "ElemValue",
    "ValueRank",
    "ToleranceMode",
    "fuzzy_compare",
    "ZERO",
    "ONE",
    "I",
    "PI",
    "E",
    "TAU",
    "HebridesError",
    "DomainError",
    "ConversionError",
    "InvariantError",
    "Settings",
    "get_settings",
    "setup_logging",
]
