"""Exceptions raised by the short link core.

Classes:
    ShortLinkError:
        Base class for all short link errors.

    InvalidInputError:
        The submitted URL is missing, not a string, or not an absolute http(s) URL.

    SlugAllocationExhausted:
        No free slug was found within the bounded number of attempts.

    StorageUnavailable:
        The backing store failed (connection, timeout, I/O).

An unknown slug is not an error: lookups return None.
"""


class ShortLinkError(Exception):
    """Base class for short link errors."""

    pass


class InvalidInputError(ShortLinkError, ValueError):
    """Raised when the URL submitted for shortening fails validation."""

    pass


class SlugAllocationExhausted(ShortLinkError):
    """Raised when every allocation attempt hit an existing slug."""

    pass


class StorageUnavailable(ShortLinkError):
    """Raised when the mapping store cannot complete an operation.

    e.g. connection refused, timeouts, unreadable data file.
    """

    pass
