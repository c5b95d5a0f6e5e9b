"""Custom exception hierarchy for tumblr_client."""

from typing import Any, Optional


class TumblrClientError(Exception):
    """Base exception for all tumblr_client errors."""

    def __init__(self, message: str = "An error occurred in tumblr_client"):
        self.message = message
        super().__init__(self.message)


class TransportError(TumblrClientError):
    """Request could not be completed by the transport.

    Carries the HTTP status and the raw Response envelope when the server
    answered at all.
    """

    def __init__(
        self,
        message: str = "Transport request failed",
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        self.status_code = status_code
        self.response = response
        super().__init__(message)


class DecodeError(TumblrClientError):
    """Response body is not the JSON shape we expected."""

    def __init__(self, message: str = "Unable to decode response"):
        super().__init__(message)


class EmptyBodyError(DecodeError):
    """Attempted to decode an empty response body."""

    def __init__(self, message: str = "Unable to populate from empty body"):
        super().__init__(message)


class ValidationError(TumblrClientError):
    """Base exception for local precondition failures."""

    def __init__(self, message: str = "Invalid request arguments"):
        super().__init__(message)


class MissingBlogNameError(ValidationError):
    def __init__(self, message: str = "No blog name provided"):
        super().__init__(message)


class MissingReblogKeyError(ValidationError):
    def __init__(self, message: str = "No reblog key provided"):
        super().__init__(message)


class MixedPaginationParamsError(ValidationError):
    """More than one cursor parameter was supplied for a single request."""

    def __init__(self, message: str = "Only can specify one of offset, since_id and before_id"):
        super().__init__(message)


class PaginationModeMismatchError(ValidationError):
    """A page fetched with one cursor strategy was advanced with another."""

    def __init__(self, message: str = "Cannot mix pagination methods between pages"):
        super().__init__(message)


class NavigationError(TumblrClientError):
    """Base exception for end-of-data signals while paging."""

    def __init__(self, message: str = "No page available"):
        super().__init__(message)


class NoNextPageError(NavigationError):
    def __init__(self, message: str = "No next page."):
        super().__init__(message)


class NoPrevPageError(NavigationError):
    def __init__(self, message: str = "No prev page."):
        super().__init__(message)


class PropertyNotFoundError(TumblrClientError):
    """Named field lookup on a Post missed."""

    def __init__(self, message: str = "Property does not exist"):
        super().__init__(message)


class UnknownPostTypeError(TumblrClientError):
    """Post type tag is not one of the known variants.

    ``fallback`` holds a base Post with no variant content so callers can
    keep working with the common fields.
    """

    def __init__(self, tag: str = "", fallback: Any = None):
        self.tag = tag
        self.fallback = fallback
        super().__init__(f"Unknown type {tag}")


class ConfigError(TumblrClientError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message)
