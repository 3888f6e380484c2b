"""Domain-level exceptions.

All rating failures are expressed as subclasses of DomainException so the
CLI and HTTP layers can catch them uniformly and display user-friendly
messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidInputError(ValidationError):
    """A rate request is missing a required section or is malformed."""


class JobNotFoundError(DomainException):
    """A requested rating job does not exist."""


class ComputationUnavailableError(DomainException):
    """Rating failed unexpectedly.

    The message is always the generic, user-safe one; the underlying cause
    is logged and chained but never shown to the caller.
    """

    MESSAGE = "Shipping rate calculation temporarily unavailable"
    HINT = "Please try again or contact support"

    def __init__(self) -> None:
        super().__init__(self.MESSAGE)
