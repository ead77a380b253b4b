"""Typed failures raised by the model backends.

These are the only errors that escape a chat turn; the HTTP layer turns
them into a 500 response carrying ``str(error)``.
"""

from __future__ import annotations


class LLMBackendError(Exception):
    """Base class for model backend failures."""


class BackendConfigurationError(LLMBackendError):
    """The backend is not usable as configured (e.g. missing API key)."""


class BackendUnavailableError(LLMBackendError):
    """The backend could not be reached."""


class BackendRequestError(LLMBackendError):
    """The backend rejected the request (HTTP 400)."""


class BackendAuthenticationError(LLMBackendError):
    """The backend rejected the credentials (HTTP 401)."""


class BackendRateLimitError(LLMBackendError):
    """The backend is throttling requests (HTTP 429)."""


class BackendServerError(LLMBackendError):
    """The backend failed internally (HTTP 5xx)."""


class BackendTimeoutError(LLMBackendError):
    """The backend did not answer in time."""
