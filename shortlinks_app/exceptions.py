"""Domain errors raised by the link store and the link service.

Every error carries the HTTP status it maps to and a message that is safe
to show to clients. The API layer renders them as ``{"error": message}``.
"""


class ShortlinksError(Exception):
    """Base class for all application-specific errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidUrlError(ShortlinksError):
    """Raised when the URL to shorten is not an absolute URI."""

    status_code = 400
    default_message = "Invalid URL provided"


class InvalidCustomCodeError(ShortlinksError):
    """Raised when a custom code has forbidden characters or is too long."""

    status_code = 400
    default_message = "Custom code can only contain letters, numbers, dashes, and underscores"


class CustomCodeTakenError(ShortlinksError):
    """Raised when a requested custom code already exists."""

    status_code = 400
    default_message = "Custom code already in use"


class LinkNotFoundError(ShortlinksError):
    """Raised when no link exists for a short code."""

    status_code = 404
    default_message = "Shortlink not found"


class StorageError(ShortlinksError):
    """Raised when the database fails (I/O, locking, corruption, ...)."""

    status_code = 500


class DuplicateCodeError(StorageError):
    """Raised when an insert violates the unique short code constraint."""

    def __init__(self, short_code: str = None):
        self.short_code = short_code
        super().__init__(f"Short code already exists: {short_code}")
