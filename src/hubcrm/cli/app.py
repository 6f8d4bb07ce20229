"""CLI app setup and common utilities.

This module creates the main Typer app and provides the shared state and
helpers used by the crm and oauth command groups.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import typer
from pydantic import BaseModel
from typer import Context, Typer

from hubcrm.config import CRMConfig, OAuthConfig, get_log_level, load_env
from hubcrm.connectors.base import HubCRMError
from hubcrm.connectors.http_client import HTTPClient
from hubcrm.crm.client import CRMClient
from hubcrm.oauth.manager import OAuthManager

# Initialize Typer app
app = Typer(
    name="hubcrm",
    help="Typed access to CRM objects and OAuth tokens.",
)


class CLIState:
    """Shared state object for CLI commands.

    Holds the per-call bearer token given with --token, and optionally a
    pre-built HTTP client (tests inject one with a mock transport).
    """

    def __init__(self, http: Optional[HTTPClient] = None):
        self.token: Optional[str] = None
        self.http = http


def get_state(ctx: Context) -> CLIState:
    if ctx.obj is None:
        # Subcommand invoked without the app callback (should not happen)
        ctx.obj = CLIState()
    return ctx.obj


def build_crm_client(ctx: Context) -> CRMClient:
    state = get_state(ctx)
    config = CRMConfig.from_env()
    return CRMClient(config, http=state.http)


def build_oauth_manager(ctx: Context) -> OAuthManager:
    state = get_state(ctx)
    config = OAuthConfig.from_env()
    return OAuthManager(config, http=state.http)


def echo_json(value: Any) -> None:
    """Print a model, list of models or plain value as indented JSON."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [v.model_dump(mode="json") if isinstance(v, BaseModel) else v for v in value]
    elif isinstance(value, dict):
        value = {
            k: v.model_dump(mode="json") if isinstance(v, BaseModel) else v
            for k, v in value.items()
        }
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


def fail(error: HubCRMError) -> None:
    """Report a library error on stderr and exit with code 1."""
    typer.echo(f"❌ {type(error).__name__}: {error}", err=True)
    raise typer.Exit(1)


@app.callback()
def init_app(
    ctx: Context,
    token: Optional[str] = typer.Option(
        None,
        "--token",
        "-t",
        help="Per-call bearer token (omit when HUBCRM_STATIC_TOKEN is set)",
        envvar="HUBCRM_ACCESS_TOKEN",
    ),
):
    """Load configuration and logging before running a command."""
    load_env()
    try:
        level = get_log_level()
    except HubCRMError as e:
        fail(e)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(CLIState)
    ctx.obj.token = token
