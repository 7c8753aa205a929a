"""
Configuration management for the GitHub credentials plugin.

This module handles loading and validating the GitHub OAuth application
settings. A configuration is built once before the first request is served
and is read-only afterwards.
"""

import logging
import os
import re
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple

# GitHub OAuth2 endpoints
GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_USER_URL = "https://api.github.com/user"

PROVIDER_NAME = "GitHub"

# GitHub rejects API calls without a User-Agent header
DEFAULT_USER_AGENT = "credentials-plugin-github"

DEFAULT_TIMEOUT = 10.0

REQUIRED_CREDENTIALS = ("client_id", "client_secret", "callback_url")

logger = logging.getLogger(__name__)


def parse_scopes(value: str) -> Tuple[str, ...]:
    """Split a comma and/or whitespace separated scope list."""
    return tuple(scope for scope in re.split(r"[\s,]+", value) if scope)


def parse_timeout(value: str) -> Optional[float]:
    """Return ``value`` as a positive number of seconds, or None if invalid."""
    try:
        timeout = float(value)
    except ValueError:
        return None
    # rejects nan as well
    if not timeout > 0:
        return None
    return timeout


def _timeout_from_env() -> float:
    value = os.environ.get("GITHUB_OAUTH_TIMEOUT")
    if value is None:
        return DEFAULT_TIMEOUT

    timeout = parse_timeout(value)
    if timeout is None:
        logger.error(
            f"Invalid GITHUB_OAUTH_TIMEOUT {value!r}, using {DEFAULT_TIMEOUT} seconds"
        )
        return DEFAULT_TIMEOUT
    return timeout


@dataclass(frozen=True)
class PluginConfig:
    """GitHub OAuth application configuration."""

    # Client credentials from the GitHub developer settings
    client_id: str = ""
    client_secret: str = field(default="", repr=False)

    # The URL GitHub redirects back to
    callback_url: str = ""

    user_agent: str = DEFAULT_USER_AGENT
    scopes: Sequence[str] = ()

    # Optional ProfileDelegate, invoked after the profile is mapped
    profile_delegate: Optional[object] = field(default=None, repr=False, compare=False)

    # Seconds allowed for each outbound call
    timeout: float = DEFAULT_TIMEOUT

    # Frontend redirect settings
    login_success_redirect: str = "/"
    login_error_redirect: str = "/login?error=auth_failed"

    def __post_init__(self):
        if isinstance(self.scopes, str):
            object.__setattr__(self, "scopes", parse_scopes(self.scopes))
        else:
            object.__setattr__(self, "scopes", tuple(self.scopes))
        if not self.user_agent:
            object.__setattr__(self, "user_agent", DEFAULT_USER_AGENT)

    @classmethod
    def from_env(cls) -> "PluginConfig":
        """Create configuration from environment variables."""
        return cls(
            client_id=os.environ.get("GITHUB_OAUTH_CLIENT_ID", ""),
            client_secret=os.environ.get("GITHUB_OAUTH_CLIENT_SECRET", ""),
            callback_url=os.environ.get("GITHUB_OAUTH_CALLBACK_URL", ""),
            user_agent=os.environ.get("GITHUB_OAUTH_USER_AGENT", DEFAULT_USER_AGENT),
            scopes=parse_scopes(os.environ.get("GITHUB_OAUTH_SCOPES", "")),
            timeout=_timeout_from_env(),
            login_success_redirect=os.environ.get(
                "GITHUB_OAUTH_LOGIN_SUCCESS_REDIRECT", "/"
            ),
            login_error_redirect=os.environ.get(
                "GITHUB_OAUTH_LOGIN_ERROR_REDIRECT", "/login?error=auth_failed"
            ),
        )

    def missing_credentials(self) -> Tuple[str, ...]:
        """Return the names of required settings that are empty."""
        return tuple(name for name in REQUIRED_CREDENTIALS if not getattr(self, name))

    @property
    def is_complete(self) -> bool:
        return not self.missing_credentials()

    def with_delegate(self, delegate) -> "PluginConfig":
        """Return a copy of this configuration using ``delegate``."""
        return replace(self, profile_delegate=delegate)
