"""
Outcome of a single authentication attempt.

Every attempt ends in exactly one of ``AuthSuccess``, ``AuthFailure`` or
``AuthInProgress``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import FailureKind
from .profile import CanonicalProfile


@dataclass(frozen=True)
class AuthSuccess:
    profile: CanonicalProfile
    raw_profile: Mapping[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class AuthFailure:
    """
    A terminal failure.

    ``status_hint`` and ``header_hint`` are what the host receives through
    its failure continuation; both are None unless the plugin is misconfigured.
    """

    kind: FailureKind
    detail: str = ""
    status_hint: Optional[int] = None
    header_hint: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class AuthInProgress:
    """The user was redirected to GitHub to log in."""

    redirect_url: str


AuthResult = Union[AuthSuccess, AuthFailure, AuthInProgress]
