"""
Errors
======
Exception hierarchy for the canceller.

    CancellerError
    ├── ConfigError        — required environment identity is missing
    └── CIClientError      — one failed call against the GitHub API
        ├── TransportError — network, connection or timeout failure
        ├── DecodeError    — response body is not the expected JSON
        └── ProviderError  — unexpected HTTP status (carries status + body)
"""
from typing import Optional


class CancellerError(Exception):
    """Base class for every error raised by the canceller."""


class ConfigError(CancellerError):
    pass


class CIClientError(CancellerError):
    """A single GitHub API call failed."""


class TransportError(CIClientError):
    pass


class DecodeError(CIClientError):
    pass


class ProviderError(CIClientError):
    """GitHub answered with a status code the caller did not expect."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        run_id: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.run_id = run_id
