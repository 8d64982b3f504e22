"""
Application exceptions. ``main`` maps each one to an HTTP status and the
``{data, error}`` envelope.
"""


class FlashdeckException(Exception):
    """Base exception for all Flashdeck application exceptions."""
    pass


class ValidationError(FlashdeckException):
    """A required field is missing, or an update carries no fields. (400)"""
    pass


class NotFoundError(FlashdeckException):
    """The row does not exist, or is not visible to the active user. (404)"""
    pass


class ConflictError(FlashdeckException):
    """A write was refused by a foreign key or check constraint. (409)"""
    pass


class AuthenticationError(FlashdeckException):
    """The session token is missing or wrong, or the active user is gone. (401)"""
    pass
