"""
HTTP clients for the two GitHub calls of the web application flow.

1. Exchange the authorization code for an access token
2. Fetch the user profile with that access token

GitHub OAuth documentation:
https://docs.github.com/en/apps/oauth-apps/building-oauth-apps/authorizing-oauth-apps
"""

import asyncio
import logging
from typing import Any, Dict

import httpx

from .config import GITHUB_TOKEN_URL, GITHUB_USER_URL, PluginConfig
from .exceptions import (
    MalformedResponseError,
    ProviderHTTPError,
    ProviderTimeoutError,
    ProviderTransportError,
    ResponseValidationError,
)

logger = logging.getLogger(__name__)


def _decode_json_object(response: httpx.Response, what: str) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError as e:
        raise MalformedResponseError(f"Failed to read GitHub {what} response: {e}")

    if not isinstance(body, dict):
        raise MalformedResponseError(
            f"GitHub {what} response is not a JSON object: {type(body).__name__}"
        )
    return body


async def _send(
    http: httpx.AsyncClient, request: httpx.Request, what: str, timeout: float
) -> httpx.Response:
    # httpx timeouts are per read; this bounds the whole call including the body
    try:
        return await asyncio.wait_for(http.send(request), timeout)
    except (httpx.TimeoutException, asyncio.TimeoutError) as e:
        raise ProviderTimeoutError(f"GitHub {what} request timed out after {timeout}s: {e!r}")
    except httpx.RequestError as e:
        raise ProviderTransportError(f"Network error during GitHub {what} request: {e}")


class TokenExchangeClient:
    """Exchange an authorization code for an access token."""

    def __init__(self, config: PluginConfig):
        self.config = config

    async def exchange(self, http: httpx.AsyncClient, code: str) -> str:
        """
        Exchange authorization code for access token.

        Args:
            http: HTTP client shared by the current attempt
            code: Authorization code from the callback

        Returns:
            Access token issued by GitHub

        Raises:
            ProviderHTTPError: Non-OK status or an OAuth error in the body
            MalformedResponseError: Body is not a JSON object
            ResponseValidationError: Body has no ``access_token``
        """
        request = http.build_request(
            "POST",
            GITHUB_TOKEN_URL,
            params={
                "client_id": self.config.client_id,
                "redirect_uri": self.config.callback_url,
                "client_secret": self.config.client_secret,
                "code": code,
            },
            headers={"Accept": "application/json"},
        )
        response = await _send(http, request, "token exchange", self.config.timeout)

        if response.status_code != httpx.codes.OK:
            logger.warning(f"GitHub token exchange failed with status {response.status_code}")
            raise ProviderHTTPError(
                f"Token exchange failed with status {response.status_code}",
                status_code=response.status_code,
            )

        token_data = _decode_json_object(response, "token exchange")

        # GitHub reports a reused or expired code as 200 with an error body
        if "error" in token_data:
            error_msg = token_data.get("error_description") or token_data["error"]
            logger.warning(f"GitHub token exchange error: {error_msg}")
            raise ProviderHTTPError(
                f"Failed to exchange code for token: {error_msg}",
                status_code=response.status_code,
            )

        access_token = token_data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ResponseValidationError("No access token in GitHub token response")

        logger.info("Exchanged GitHub authorization code for access token")
        return access_token


class ProfileFetchClient:
    """Fetch the authenticated user's GitHub profile."""

    def __init__(self, config: PluginConfig):
        self.config = config

    async def fetch(self, http: httpx.AsyncClient, access_token: str) -> Dict[str, Any]:
        """
        Fetch the raw user profile.

        Args:
            http: HTTP client shared by the current attempt
            access_token: Token returned by the token exchange

        Returns:
            The decoded JSON object, unmodified
        """
        request = http.build_request(
            "GET",
            GITHUB_USER_URL,
            headers={
                "Accept": "application/json",
                "User-Agent": self.config.user_agent,
                "Authorization": f"token {access_token}",
            },
        )
        response = await _send(http, request, "user profile", self.config.timeout)

        if response.status_code != httpx.codes.OK:
            logger.warning(f"GitHub user profile fetch failed with status {response.status_code}")
            raise ProviderHTTPError(
                f"Failed to fetch user profile: status {response.status_code}",
                status_code=response.status_code,
            )

        user_data = _decode_json_object(response, "user profile")
        logger.debug(f"GitHub user profile fields: {sorted(user_data)}")
        return user_data
