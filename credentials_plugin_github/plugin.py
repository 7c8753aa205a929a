"""
GitHub credentials plugin.

This module provides the plugin class that authenticates users with the
GitHub OAuth web application flow and registers itself with a Flask app.
"""

import logging
from http import HTTPStatus
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

import httpx
from flask import Flask

from .blueprint import EXTENSION_KEY, github_bp
from .client import ProfileFetchClient, TokenExchangeClient
from .config import GITHUB_AUTHORIZE_URL, PROVIDER_NAME, REQUIRED_CREDENTIALS, PluginConfig
from .exceptions import (
    DelegateError,
    FailureKind,
    GitHubCredentialsError,
    ResponseValidationError,
)
from .profile import CanonicalProfile, map_profile
from .result import AuthFailure, AuthInProgress, AuthResult, AuthSuccess

logger = logging.getLogger(__name__)


class Redirector(Protocol):
    """Anything able to send the user's browser to another URL."""

    def redirect(self, url: str) -> None:
        ...


FailureCallback = Callable[[Optional[int], Optional[Dict[str, str]]], None]


class GitHubCredentialsPlugin:
    """
    Authentication using GitHub web login with OAuth.

    A request without a ``code`` query parameter starts the login by
    redirecting to GitHub. The callback request carrying ``code`` is
    exchanged for an access token, which is used to fetch and map the
    user's profile.

    The configuration is immutable; build a new plugin to change it.
    """

    name = PROVIDER_NAME
    redirecting = True

    def __init__(
        self,
        config: Optional[PluginConfig] = None,
        app: Flask = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the plugin.

        Args:
            config: Plugin configuration (loaded from the environment in
                init_app if omitted)
            app: Flask application instance (optional, can call init_app later)
            transport: httpx transport used for calls to GitHub
        """
        self.config = config
        self.app = app
        self._transport = transport

        if app is not None:
            self.init_app(app)

    @staticmethod
    def describe() -> str:
        return "github authenticated"

    def authorization_url(self) -> str:
        """Build the GitHub authorize URL the login redirect points to."""
        url = (
            f"{GITHUB_AUTHORIZE_URL}?client_id={self.config.client_id}"
            f"&redirect_uri={self.config.callback_url}&response_type=code"
        )
        if self.config.scopes:
            # space delimited list
            url += "&scope=" + " ".join(self.config.scopes)
        return url

    async def authenticate_attempt(
        self, query: Mapping[str, str], redirector: Redirector
    ) -> AuthResult:
        """
        Run one authentication attempt.

        Args:
            query: Query parameters of the incoming request
            redirector: Used to send the browser to GitHub on login

        Returns:
            Exactly one AuthSuccess, AuthFailure or AuthInProgress
        """
        # config stays None until init_app when the plugin is used outside Flask
        if self.config is None:
            missing = REQUIRED_CREDENTIALS
        else:
            missing = self.config.missing_credentials()
        if missing:
            logger.error(f"GitHub OAuth not configured - missing {', '.join(missing)}")
            return AuthFailure(
                kind=FailureKind.CONFIGURATION_MISSING,
                detail=f"Missing configuration: {', '.join(missing)}",
                status_hint=HTTPStatus.UNAUTHORIZED,
                header_hint={"WWW-Authenticate": "Internal server error"},
            )

        code = query.get("code")
        if code is None:
            return self._start_login(redirector)

        try:
            return await self._complete_login(code)
        except GitHubCredentialsError as e:
            logger.warning(f"{self.name} authentication failed ({e.kind.value}): {e}")
            return AuthFailure(kind=e.kind, detail=str(e))

    async def authenticate(
        self,
        query: Mapping[str, str],
        redirector: Redirector,
        options: Mapping[str, Any],
        on_success: Callable[[CanonicalProfile], None],
        on_failure: FailureCallback,
        on_pass: FailureCallback,
        in_progress: Callable[[], None],
    ) -> None:
        """
        Authenticate a request and report through the host's continuations.

        Exactly one of ``on_success``, ``on_failure`` or ``in_progress`` is
        called. ``on_pass`` is never called since every request is either a
        login or a callback for this plugin. ``options`` is accepted for
        interface compatibility and not used.
        """
        result = await self.authenticate_attempt(query, redirector)

        if isinstance(result, AuthSuccess):
            on_success(result.profile)
        elif isinstance(result, AuthInProgress):
            in_progress()
        else:
            on_failure(result.status_hint, result.header_hint)

    def _start_login(self, redirector: Redirector) -> AuthResult:
        url = self.authorization_url()
        try:
            redirector.redirect(url)
        except Exception as e:
            logger.error(f"Failed to redirect to {self.name} login page: {e}")
            return AuthFailure(kind=FailureKind.REDIRECT_FAILED, detail=str(e))

        logger.info(f"Initiating {self.name} login, redirecting to provider")
        logger.debug(f"Authorization URL: {url}")
        return AuthInProgress(redirect_url=url)

    async def _complete_login(self, code: str) -> AuthSuccess:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout),
            transport=self._transport,
        ) as http:
            access_token = await TokenExchangeClient(self.config).exchange(http, code)
            raw_profile = await ProfileFetchClient(self.config).fetch(http, access_token)

        profile = map_profile(raw_profile)
        if profile is None:
            raise ResponseValidationError("No integer user id in GitHub profile")

        delegate = self.config.profile_delegate
        if delegate is not None:
            try:
                delegate.update(profile, raw_profile)
            except Exception as e:
                raise DelegateError(f"Profile delegate failed: {e}") from e

        logger.info(f"User {profile.id} authenticated successfully via {self.name}")
        return AuthSuccess(profile=profile, raw_profile=raw_profile)

    def init_app(self, app: Flask, *args, **kwargs):
        """
        Initialize the plugin with a Flask application.

        Args:
            app: Flask application instance
        """
        self.app = app

        if self.config is None:
            self.config = PluginConfig.from_env()

        app.extensions[EXTENSION_KEY] = self

        if not app.config.get("SECRET_KEY"):
            logger.warning(
                "Flask SECRET_KEY not set. Sessions will not persist across restarts."
            )

        logger.info("GitHub credentials plugin initialized")
        if not self.config.is_complete:
            logger.warning(
                f"GitHub OAuth not fully configured - missing "
                f"{', '.join(self.config.missing_credentials())}"
            )

    def get_blueprint(self):
        """Return the Flask blueprint for this extension."""
        return github_bp

    def get_config(self):
        """
        Return Flask configuration needed by the login flow.

        SAMESITE must be "Lax" for the session to survive the redirect back
        from GitHub.
        """
        return {
            "SESSION_COOKIE_SECURE": False,
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SAMESITE": "Lax",
        }

    def get_config_secrets_to_obfuscate(self):
        """Return config keys that should not be exposed."""
        return ["GITHUB_OAUTH_CLIENT_SECRET"]

    @staticmethod
    def get_name() -> str:
        return "credentials-plugin-github"

    @staticmethod
    def get_version() -> str:
        from . import __version__
        return __version__

    @staticmethod
    def get_description() -> str:
        return "GitHub OAuth web login for Flask applications"
