"""OAuth token CLI commands.

Commands:
- oauth setup-url: Print the authorization entry point
- oauth exchange: Trade an authorization code for tokens
- oauth refresh: Trade a refresh token for new tokens
- oauth info: Show the user a refresh token belongs to
- oauth revoke: Delete a refresh token
"""

from __future__ import annotations

import typer
from typer import Context, Typer

from hubcrm.cli.app import app, build_oauth_manager, echo_json, fail
from hubcrm.connectors.base import HubCRMError

oauth_app = Typer(help="Manage OAuth tokens")
app.add_typer(oauth_app, name="oauth")


@oauth_app.command(name="setup-url")
def oauth_setup_url(ctx: Context):
    """Print the URL users visit to install the app."""
    try:
        url = build_oauth_manager(ctx).get_setup_url()
    except HubCRMError as e:
        fail(e)
    typer.echo(url)


@oauth_app.command(name="exchange")
def oauth_exchange(
    ctx: Context,
    code: str = typer.Argument(..., help="One-time authorization code"),
):
    """Trade an authorization code for an access/refresh token pair."""
    try:
        tokens = build_oauth_manager(ctx).exchange_code(code)
    except HubCRMError as e:
        fail(e)
    echo_json(tokens)


@oauth_app.command(name="refresh")
def oauth_refresh(
    ctx: Context,
    refresh_token: str = typer.Argument(..., help="Refresh token"),
):
    """Trade a refresh token for a new token pair."""
    try:
        tokens = build_oauth_manager(ctx).refresh_tokens(refresh_token)
    except HubCRMError as e:
        fail(e)
    echo_json(tokens)


@oauth_app.command(name="info")
def oauth_info(
    ctx: Context,
    refresh_token: str = typer.Argument(..., help="Refresh token"),
):
    """Show the user email and internal user id behind a refresh token."""
    try:
        info = build_oauth_manager(ctx).introspect_refresh_token(refresh_token)
    except HubCRMError as e:
        fail(e)
    echo_json(info)


@oauth_app.command(name="revoke")
def oauth_revoke(
    ctx: Context,
    refresh_token: str = typer.Argument(..., help="Refresh token"),
):
    """Delete a refresh token."""
    try:
        build_oauth_manager(ctx).revoke_refresh_token(refresh_token)
    except HubCRMError as e:
        fail(e)
    typer.echo("✅ Refresh token revoked")
