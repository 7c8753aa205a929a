"""
Errors raised while authenticating against GitHub.

Every error carries a ``FailureKind`` so the plugin can fold it into an
``AuthFailure`` result.
"""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Why an authentication attempt failed."""

    CONFIGURATION_MISSING = "configuration_missing"
    PROVIDER_HTTP = "provider_http"
    PROVIDER_TIMEOUT = "provider_timeout"
    PROVIDER_TRANSPORT = "provider_transport"
    MALFORMED_RESPONSE = "malformed_response"
    VALIDATION_FAILED = "validation_failed"
    REDIRECT_FAILED = "redirect_failed"
    DELEGATE_FAILED = "delegate_failed"


class GitHubCredentialsError(Exception):
    """Base exception for GitHub authentication errors."""

    kind = FailureKind.PROVIDER_HTTP


class ProviderHTTPError(GitHubCredentialsError):
    """Raised when GitHub answers with a non-OK status or an OAuth error."""

    kind = FailureKind.PROVIDER_HTTP

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderTimeoutError(GitHubCredentialsError):
    """Raised when a call to GitHub exceeds the configured timeout."""

    kind = FailureKind.PROVIDER_TIMEOUT


class ProviderTransportError(GitHubCredentialsError):
    """Raised when GitHub cannot be reached."""

    kind = FailureKind.PROVIDER_TRANSPORT


class MalformedResponseError(GitHubCredentialsError):
    """Raised when a response body is not a JSON object."""

    kind = FailureKind.MALFORMED_RESPONSE


class ResponseValidationError(GitHubCredentialsError):
    """Raised when a response lacks a required field."""

    kind = FailureKind.VALIDATION_FAILED


class DelegateError(GitHubCredentialsError):
    """Raised when the profile delegate fails."""

    kind = FailureKind.DELEGATE_FAILED
