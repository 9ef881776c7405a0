"""
Domain Exceptions

Errors raised by entities and value objects when an invariant would be broken.
The domain never catches these itself; the service layer translates them into
rejected command results.
"""


class DomainError(Exception):
    """Base exception for all domain rule violations"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentError(DomainError, ValueError):
    """Raised when a value object or entity is constructed from malformed input"""


class InvalidOperationError(DomainError):
    """Raised when an operation is not allowed in the current state"""


class CurrencyMismatchError(InvalidOperationError):
    """Raised when money arithmetic mixes two currencies"""

    def __init__(self, left: str, right: str):
        super().__init__(
            f"Currency mismatch: {left} vs {right}",
            {"left": left, "right": right}
        )
