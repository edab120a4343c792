"""Typed exceptions for binding management and span resolution."""


class ButtonLockError(Exception):
    """Base class for binding registry errors."""


class NoSuchBindingError(ButtonLockError, LookupError):
    """Raised when an operation targets a binding not held by the registry."""


class UnknownEventError(ButtonLockError, ValueError):
    """Raised when an event keyword names no supported input event."""


class SpanError(ValueError):
    """Base class for span related errors."""


class SpanOutOfBoundsError(SpanError):
    """Raised when span coordinates are invalid or out of bounds."""
