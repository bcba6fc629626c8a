"""Exception types raised by the session engine.

Fatal errors (``ConfigurationError``, ``ProviderEnvironmentError``) stop the
process before the loop starts. ``TransportError`` and its subclasses are
recovered by the completion pipeline. ``GitError`` only aborts the current
commit flow.
"""


class LozError(Exception):
    """Base class for all loz errors."""


class ConfigurationError(LozError):
    """Missing credential or unreadable persisted configuration."""


class ProviderEnvironmentError(LozError):
    """A required local daemon is missing or reports an unexpected version."""


class TransportError(LozError):
    """A provider call failed (network, timeout, unexpected response)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(TransportError):
    """The provider rejected the credential (HTTP 401)."""


class RateLimitError(TransportError):
    """The provider throttled the request (HTTP 429)."""


class StreamInterruptedError(TransportError):
    """A stream failed after some fragments were already delivered."""

    def __init__(self, message: str, partial: str = ""):
        super().__init__(message)
        self.partial = partial


class GitError(LozError):
    """A git operation failed (no repository, nothing staged, commit rejected)."""
