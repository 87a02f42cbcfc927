from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidKeyError(ValidationError):
    """Raised when a counter key or customer id is empty or malformed."""


class InvalidValueError(ValidationError):
    """Raised when a counter value, width or affix is out of range."""


class ParseError(ValidationError):
    """Raised when a document number string cannot be parsed."""


class AllocationConflictError(UserError):
    """Raised when concurrent writers kept winning until the retry budget ran out.

    Transient: the caller may repeat the whole allocation.
    """

    def __init__(self, message: str = "Could not generate document number, please try again") -> None:
        super().__init__(message)


class StoreUnavailableError(UserError):
    """Raised when the counter store cannot be reached."""

    def __init__(self, message: str = "Counter store is unavailable, please try again later") -> None:
        super().__init__(message)
