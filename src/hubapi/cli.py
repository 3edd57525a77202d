"""CLI entry point for the HubSpot adapter.

Commands:
- owners list / owners find: Owners API
- topics list: blog topics
- pipelines list: deal pipelines
- url: print the URL a request would use, without sending it
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import typer
from typer import Context, Typer

from hubapi.config import HubSpotConfig
from hubapi.connectors import Connection, ConnectorError, build_url
from hubapi.crm import DealPipeline, Owner, Topic

app = Typer(
    name="hubapi",
    help="HubSpot API adapter: query owners, topics and pipelines.",
)
owners_app = Typer(help="Owners API")
topics_app = Typer(help="Blog topics API")
pipelines_app = Typer(help="Deal pipelines API")
app.add_typer(owners_app, name="owners")
app.add_typer(topics_app, name="topics")
app.add_typer(pipelines_app, name="pipelines")


class CLIState:
    """Shared state object for CLI commands."""

    def __init__(self, config: HubSpotConfig):
        self.config = config
        self._connection: Optional[Connection] = None

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            self._connection = Connection(self.config)
        return self._connection


def _state(ctx: Context) -> CLIState:
    if ctx.obj is None:
        raise RuntimeError("CLI state not initialized")
    return ctx.obj


def _fail(error: Exception) -> None:
    typer.echo(f"❌ {type(error).__name__}: {error}", err=True)
    raise typer.Exit(1)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, default=str))


def _parse_params(pairs: List[str]) -> Dict[str, Any]:
    """``["a=1", "b=x", "b=y"]`` -> ``{"a": "1", "b": ["x", "y"]}``."""
    params: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'")
        if key in params:
            existing = params[key]
            params[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params


@app.callback()
def init_app(
    ctx: Context,
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Log level for request/response logging",
        envvar="HUBSPOT_LOG_LEVEL",
    ),
):
    """Load configuration from the environment (and .env)."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = HubSpotConfig.from_env()
    config.logger = logging.getLogger("hubapi.http")
    ctx.obj = CLIState(config)


@owners_app.command(name="list")
def owners_list(
    ctx: Context,
    include_inactive: bool = typer.Option(False, "--include-inactive", help="Include inactive owners"),
):
    """List all owners."""
    try:
        owners = Owner.all(include_inactive, connection=_state(ctx).connection)
    except ConnectorError as e:
        _fail(e)
    for owner in owners:
        typer.echo(f"{owner.owner_id}\t{owner.email}")


@owners_app.command(name="find")
def owners_find(
    ctx: Context,
    email: str = typer.Argument(..., help="Owner email"),
    include_inactive: bool = typer.Option(False, "--include-inactive", help="Include inactive owners"),
):
    """Find an owner by email."""
    try:
        owner = Owner.find_by_email(email, include_inactive, connection=_state(ctx).connection)
    except ConnectorError as e:
        _fail(e)
    if owner is None:
        typer.echo(f"❌ No owner with email {email}", err=True)
        raise typer.Exit(1)
    _echo_json(owner.properties)


@topics_app.command(name="list")
def topics_list(ctx: Context):
    """List blog topics."""
    try:
        topics = Topic.list(connection=_state(ctx).connection)
    except ConnectorError as e:
        _fail(e)
    for topic in topics:
        typer.echo(f"{topic['id']}\t{topic['name']}")


@pipelines_app.command(name="list")
def pipelines_list(ctx: Context):
    """List deal pipelines."""
    try:
        pipelines = DealPipeline.all(connection=_state(ctx).connection)
    except ConnectorError as e:
        _fail(e)
    for pipeline in pipelines:
        typer.echo(f"{pipeline.pipeline_id}\t{pipeline.label}\t{len(pipeline.stages)} stages")


@app.command()
def url(
    ctx: Context,
    template: str = typer.Argument(..., help="Path template, e.g. /owners/v2/owners/:owner_id"),
    param: List[str] = typer.Option([], "--param", "-p", help="key=value (repeatable)"),
):
    """Print the URL a GET to TEMPLATE would use."""
    try:
        typer.echo(build_url(_state(ctx).config, template, _parse_params(param)))
    except ConnectorError as e:
        _fail(e)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
