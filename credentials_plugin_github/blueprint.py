"""
Flask blueprint for GitHub authentication.

This blueprint provides the following endpoints:
- GET /auth/github/login - Redirect to GitHub to log in
- GET /auth/github/callback - GitHub callback (receives authorization code)
- GET /auth/github/logout - Remove the GitHub profile from the session
- GET /auth/github/info - Describe the configured provider
"""

import asyncio
import logging

from flask import current_app, jsonify, redirect, request, session, url_for
from flask_smorest import Blueprint

from .result import AuthFailure, AuthInProgress, AuthSuccess

logger = logging.getLogger(__name__)

EXTENSION_KEY = "credentials_plugin_github"

# Session key holding the authenticated user's profile
SESSION_PROFILE_KEY = "github_profile"

github_bp = Blueprint(
    "github_auth",
    __name__,
    url_prefix="/auth/github",
    description="GitHub OAuth authentication endpoints"
)


def get_plugin():
    """Return the plugin registered with the current app."""
    return current_app.extensions[EXTENSION_KEY]


class FlaskRedirector:
    """Captures the redirect response issued by the plugin."""

    def __init__(self):
        self.response = None

    def redirect(self, url: str) -> None:
        self.response = redirect(url)


def _authenticate():
    plugin = get_plugin()
    config = plugin.config
    redirector = FlaskRedirector()

    try:
        result = asyncio.run(plugin.authenticate_attempt(request.args, redirector))
    except Exception as e:
        logger.exception(f"Error processing GitHub authentication: {e}")
        return redirect(config.login_error_redirect)

    if isinstance(result, AuthInProgress):
        return redirector.response

    if isinstance(result, AuthSuccess):
        session[SESSION_PROFILE_KEY] = result.profile.to_dict()
        return redirect(config.login_success_redirect)

    if isinstance(result, AuthFailure):
        logger.warning(f"GitHub authentication failed: {result.kind.value}")
    return redirect(config.login_error_redirect)


@github_bp.route("/login")
def login():
    """
    Initiate the GitHub login.

    Without a ``code`` query parameter this redirects to GitHub.
    """
    return _authenticate()


@github_bp.route("/callback")
def callback():
    """
    GitHub callback endpoint.

    Exchanges the authorization code for an access token, fetches the user
    profile and stores it in the session.
    """
    return _authenticate()


@github_bp.route("/logout")
def logout():
    """Remove the GitHub profile from the session."""
    session.pop(SESSION_PROFILE_KEY, None)
    logger.info("User logged out")
    return redirect("/")


@github_bp.route("/info")
def auth_info():
    """
    Return information about the configured provider.

    This endpoint can be used by the frontend to display login options.
    """
    plugin = get_plugin()

    return jsonify({
        "provider": plugin.name,
        "login_url": url_for("github_auth.login", _external=True),
        "configured": plugin.config.is_complete,
    })
