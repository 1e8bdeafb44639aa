"""Error types for the parfum catalog and consultation client.

Every failure raised by the core derives from ParfumError so the CLI can
catch them uniformly and render a user-facing message.
"""

from typing import Optional


class ParfumError(Exception):
    """Base class for all catalog and consultation errors."""


class ConfigError(ParfumError):
    """Required configuration (e.g. the API key) is missing."""


class PersistenceError(ParfumError):
    """The catalog file could not be read, parsed, or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class NotFoundError(ParfumError):
    """A lookup by id or name yielded no record."""

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.identifier = identifier


class ValidationError(NotFoundError):
    """Malformed input reached the core.

    Subclasses NotFoundError so callers that handle a missing record also
    handle an update that cannot be applied.
    """


class TransportError(ParfumError):
    """The completion service could not be reached or timed out."""

    def __init__(self, message: str, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


class ServiceError(ParfumError):
    """The completion service answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(ServiceError):
    """The completion service answered, but not with a usable completion."""
