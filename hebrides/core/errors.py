"""
Library exceptions.

Defines the recoverable error kinds raised by the value types and the
internal invariant error used for states that correct code never reaches.
"""

from typing import Any, Dict, Optional


class HebridesError(Exception):
    """Base exception for recoverable hebrides errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DomainError(HebridesError, ValueError):
    """Raised when an operation's mathematical precondition is violated"""

    def __init__(self, operation: str, argument: Any, domain: str):
        super().__init__(
            message=f"{operation}({argument}) is undefined: argument must be in {domain}",
            details={"operation": operation, "argument": argument, "domain": domain},
        )

    @property
    def operation(self) -> str:
        return self.details["operation"]


class ConversionError(HebridesError, ValueError):
    """Raised when a value cannot be narrowed to the requested type"""

    def __init__(self, value: Any, target: str, reason: str):
        super().__init__(
            message=f"Cannot convert {value} to {target}: {reason}",
            details={"value": value, "target": target, "reason": reason},
        )


class InvariantError(RuntimeError):
    """
    Raised for internal states that correct use never reaches.

    Not a HebridesError: it signals a bug, not bad input.
    """
