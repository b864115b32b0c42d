"""Exception types raised by irail-status."""


class IrailError(Exception):
    """Base class for every error this package raises on purpose."""


class RequestError(IrailError):
    """The API could not be reached, timed out or answered with an error status."""


class DecodeError(IrailError):
    """The response body could not be decoded or is not valid JSON."""


class ValidationError(IrailError, ValueError):
    """User input failed a format or range check."""


class MissingKeyError(IrailError, LookupError):
    """A decoded response lacks the key the caller asked for."""

    def __init__(self, key: str):
        super().__init__(f"response has no '{key}' entry")
        self.key = key
