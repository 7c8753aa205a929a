"""
Canonical user profile for GitHub authenticated users.

This module maps the raw ``GET /user`` payload onto the profile shape the
host application consumes.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, List, Mapping, Optional, Protocol

from .config import PROVIDER_NAME

logger = logging.getLogger(__name__)


@dataclass
class ProfileEmail:
    value: str
    type: str = "public"


@dataclass
class ProfilePhoto:
    url: str


@dataclass
class CanonicalProfile:
    """Provider independent user identity."""

    id: str
    display_name: str = ""
    provider: str = PROVIDER_NAME
    emails: Optional[List[ProfileEmail]] = None
    photos: Optional[List[ProfilePhoto]] = None

    def to_dict(self) -> dict:
        """Return a JSON serialisable representation."""
        return asdict(self)


class ProfileDelegate(Protocol):
    """Hook for customising a profile before authentication succeeds."""

    def update(self, profile: CanonicalProfile, raw_profile: Mapping[str, Any]) -> None:
        """
        Adjust ``profile`` using the raw GitHub payload.

        Raise any exception to fail the authentication attempt.
        """
        ...


def map_profile(raw_profile: Mapping[str, Any]) -> Optional[CanonicalProfile]:
    """
    Build a canonical profile from a GitHub user payload.

    GitHub user profile responses look like this (abridged):

        {
            "login": "<string>",
            "id": <int>,
            "avatar_url": "<string>",
            "name": "<string>",
            "email": "<string or null>",
            ...
        }

    Args:
        raw_profile: Decoded JSON object returned by the user endpoint

    Returns:
        The mapped profile, or None if the payload has no integer ``id``
    """
    user_id = raw_profile.get("id")
    # bool is a subclass of int but never a valid GitHub id
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        logger.warning(f"GitHub profile has no integer id: {user_id!r}")
        return None

    name = raw_profile.get("name")
    email = raw_profile.get("email")
    avatar_url = raw_profile.get("avatar_url")

    return CanonicalProfile(
        id=str(user_id),
        display_name=name if isinstance(name, str) else "",
        provider=PROVIDER_NAME,
        emails=[ProfileEmail(value=email, type="public")] if isinstance(email, str) else None,
        photos=[ProfilePhoto(url=avatar_url)] if isinstance(avatar_url, str) else None,
    )
