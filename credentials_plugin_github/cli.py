"""
Flask CLI commands for the GitHub credentials plugin.

These commands help with setup and debugging of the GitHub OAuth
application settings.
"""

import os

import click
import httpx

from .config import (
    GITHUB_AUTHORIZE_URL,
    GITHUB_TOKEN_URL,
    GITHUB_USER_URL,
    PluginConfig,
    parse_timeout,
)
from .plugin import GitHubCredentialsPlugin


@click.group("github-oauth")
def github_cli():
    """GitHub credentials plugin management commands."""
    pass


@github_cli.command("show-config")
def show_config():
    """Display current GitHub OAuth configuration."""
    config = PluginConfig.from_env()

    click.echo("=== GitHub OAuth Configuration ===")
    click.echo(f"Client ID: {config.client_id[:8] + '...' if config.client_id else 'Not configured'}")
    click.echo(f"Client Secret: {'Configured' if config.client_secret else 'Not configured'}")
    click.echo(f"Callback URL: {config.callback_url or 'Not configured'}")
    click.echo(f"Scopes: {' '.join(config.scopes) or 'None'}")
    click.echo(f"User-Agent: {config.user_agent}")
    click.echo(f"Timeout: {config.timeout} seconds")

    click.echo("\n=== Redirects ===")
    click.echo(f"Login success: {config.login_success_redirect}")
    click.echo(f"Login error: {config.login_error_redirect}")


@github_cli.command("validate-config")
def validate_config():
    """Validate the current configuration."""
    config = PluginConfig.from_env()
    errors = [
        f"GITHUB_OAUTH_{name.upper()} not configured"
        for name in config.missing_credentials()
    ]
    warnings = []

    if config.callback_url and not config.callback_url.startswith(("http://", "https://")):
        errors.append(f"GITHUB_OAUTH_CALLBACK_URL is not an absolute URL: {config.callback_url}")
    if not config.scopes:
        warnings.append("GITHUB_OAUTH_SCOPES not configured (only public profile data is granted)")
    timeout_value = os.environ.get("GITHUB_OAUTH_TIMEOUT")
    if timeout_value is not None and parse_timeout(timeout_value) is None:
        errors.append(
            f"GITHUB_OAUTH_TIMEOUT must be a positive number of seconds, got {timeout_value!r}"
        )

    if warnings:
        click.echo("=== Warnings ===")
        for warning in warnings:
            click.echo(f"  ! {warning}")

    if errors:
        click.echo("\n=== Errors ===")
        for error in errors:
            click.echo(f"  x {error}")
        click.echo(f"\nConfiguration validation failed with {len(errors)} error(s)")
        raise SystemExit(1)

    click.echo("\n[OK] Configuration is valid!")


@github_cli.command("authorize-url")
def authorize_url():
    """Print the URL users are redirected to when logging in."""
    config = PluginConfig.from_env()
    if not config.is_complete:
        click.echo(
            f"Missing configuration: {', '.join(config.missing_credentials())}", err=True
        )
        raise SystemExit(1)

    click.echo(GitHubCredentialsPlugin(config).authorization_url())


@github_cli.command("test-connection")
def test_connection():
    """Test connectivity to the GitHub endpoints."""
    config = PluginConfig.from_env()

    click.echo("=== Testing GitHub Connectivity ===\n")

    checks = [
        ("Authorization URL", "HEAD", GITHUB_AUTHORIZE_URL),
        # Errors are expected without credentials; only reachability matters
        ("Token URL", "POST", GITHUB_TOKEN_URL),
        ("User URL", "GET", GITHUB_USER_URL),
    ]
    with httpx.Client(timeout=config.timeout, headers={"User-Agent": config.user_agent}) as client:
        for label, method, url in checks:
            try:
                client.request(method, url)
                click.echo(f"[OK] {label} reachable: {url}")
            except httpx.RequestError as e:
                click.echo(f"[FAIL] {label}: {e}")
