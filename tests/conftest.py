"""Pytest configuration and shared fixtures."""

import asyncio

import httpx
import pytest

from credentials_plugin_github import GitHubCredentialsPlugin, PluginConfig

GITHUB_USER = {
    "login": "ada",
    "id": 42,
    "name": "Ada",
    "email": "ada@example.com",
    "avatar_url": "https://img/ada.png",
}


class FakeGitHub:
    """Serves canned GitHub responses and records every request."""

    def __init__(self):
        self.requests = []
        self.token_status = 200
        self.token_body = {"access_token": "abc123", "token_type": "bearer", "scope": ""}
        self.user_status = 200
        self.user_body = dict(GITHUB_USER)
        self.error = None

    @staticmethod
    def _response(status, body):
        # a callable body produces an async byte stream
        if callable(body):
            return httpx.Response(status, content=body())
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, content=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(f"simulated {self.error.__name__}", request=request)
        if request.url.host == "github.com" and request.url.path == "/login/oauth/access_token":
            return self._response(self.token_status, self.token_body)
        if request.url.host == "api.github.com" and request.url.path == "/user":
            return self._response(self.user_status, self.user_body)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def token_requests(self):
        return [r for r in self.requests if r.url.path == "/login/oauth/access_token"]

    @property
    def user_requests(self):
        return [r for r in self.requests if r.url.host == "api.github.com"]


def trickle(interval=0.05):
    """Return a body that sends one byte per ``interval`` forever."""

    async def stream():
        while True:
            await asyncio.sleep(interval)
            yield b" "

    return stream


class RecordingRedirector:
    def __init__(self):
        self.urls = []

    def redirect(self, url: str) -> None:
        self.urls.append(url)


@pytest.fixture
def config():
    """Provide a complete plugin configuration."""
    return PluginConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        callback_url="http://localhost:5000/auth/github/callback",
        scopes=["read:user", "user:email"],
    )


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def slow_body():
    """A response body that never finishes."""
    return trickle()


@pytest.fixture
def redirector():
    return RecordingRedirector()


@pytest.fixture
def plugin(config, fake_github):
    """Provide a plugin talking to the fake GitHub."""
    return GitHubCredentialsPlugin(config, transport=fake_github.transport)
