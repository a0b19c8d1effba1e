"""Error taxonomy for backlog-board.

Callers distinguish fatal-at-startup failures from failures that are
recovered while navigating by catching the concrete subclasses.
"""

from typing import Optional


class BacklogError(Exception):
    """Base class for every error raised by backlog-board."""


class ConfigError(BacklogError):
    """A required configuration value is missing or blank."""


class TransportError(BacklogError):
    """The request could not be completed.

    Covers connection failures, timeouts and non-2xx responses. For the
    latter ``status_code`` holds the HTTP status.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(BacklogError):
    """The response body does not match the expected schema."""
