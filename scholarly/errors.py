class ScholarlyError(Exception):
    """Base class for errors raised by hub operations."""


class ValidationError(ScholarlyError):
    """Raw input could not be turned into a record."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class UnauthorizedError(ScholarlyError):
    """A supplied admin passphrase did not match."""


class PermissionDeniedError(ScholarlyError):
    """The current session lacks the staff role."""


class NotFoundError(ScholarlyError):
    pass
