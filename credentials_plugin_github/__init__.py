"""
credentials-plugin-github

A GitHub OAuth credentials plugin that authenticates users with the
GitHub web application flow and produces a canonical user profile.

This plugin provides:
- Login redirect to GitHub's authorize endpoint
- Authorization code to access token exchange
- User profile retrieval and mapping, with an optional customisation hook
- A Flask blueprint and CLI for mounting the plugin in a Flask app
"""

__version__ = "0.1.0"

from .blueprint import github_bp
from .config import PluginConfig
from .exceptions import FailureKind, GitHubCredentialsError
from .plugin import GitHubCredentialsPlugin
from .profile import CanonicalProfile, ProfileDelegate, ProfileEmail, ProfilePhoto, map_profile
from .result import AuthFailure, AuthInProgress, AuthResult, AuthSuccess

__all__ = [
    "GitHubCredentialsPlugin",
    "PluginConfig",
    "CanonicalProfile",
    "ProfileDelegate",
    "ProfileEmail",
    "ProfilePhoto",
    "map_profile",
    "AuthFailure",
    "AuthInProgress",
    "AuthResult",
    "AuthSuccess",
    "FailureKind",
    "GitHubCredentialsError",
    "github_bp",
    "__version__",
]
