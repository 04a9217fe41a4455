"""
Error types for dxcore value objects.

Every failure in the model layer is one of these. They carry structured
attributes so callers can inspect them, and stable message formats so
they read well in logs:

- ValidationError: a value violates one of its invariants
- ParseError: text could not be turned into a value
- MarshalError: an invalid value was asked to serialize itself
- UnmarshalError: serialized data could not be decoded into a valid value
- CollectedErrors: several validation failures reported together

All of them subclass ValueError. None is retryable.
"""

from typing import Any, List, Optional


class ModelError(ValueError):
    """Base class for all dxcore model errors."""
    pass


class ValidationError(ModelError):
    """
    Raised when a value violates an invariant.

    Attributes:
        type_name: Name of the type being validated (e.g. "Signature")
        field: Offending field, or None when the whole value is at fault
        reason: Human-readable explanation
        value: The offending value, when useful for diagnostics
    """

    def __init__(self, type_name: str, field: Optional[str], reason: str, value: Any = None):
        self.type_name = type_name
        self.field = field
        self.reason = reason
        self.value = value
        if field:
            message = f"invalid {type_name}.{field}: {reason}"
        else:
            message = f"invalid {type_name}: {reason}"
        super().__init__(message)


class ParseError(ModelError):
    """Raised when a Parse helper rejects its textual input."""

    def __init__(self, type_name: str, value: Any, reason: Optional[str] = None):
        self.type_name = type_name
        self.value = value
        self.reason = reason
        message = f"invalid {type_name} value: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MarshalError(ModelError):
    """Raised when an invalid value is serialized. No output is produced."""

    def __init__(self, type_name: str, reason: str):
        self.type_name = type_name
        self.reason = reason
        super().__init__(f"cannot marshal invalid {type_name}: {reason}")


class UnmarshalError(ModelError):
    """Raised when serialized data cannot be turned into a valid value."""

    def __init__(self, type_name: str, reason: str, data: Any = None):
        self.type_name = type_name
        self.reason = reason
        self.data = data
        super().__init__(f"cannot unmarshal {type_name}: {reason}")


class CollectedErrors(ModelError):
    """Several validation failures gathered into one error."""

    def __init__(self, errors: List[Exception]):
        self.errors = list(errors)
        lines = [str(e) for e in self.errors]
        super().__init__(f"{len(lines)} validation error(s): " + "; ".join(lines))
