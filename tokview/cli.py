"""Tokview CLI — look things up from the terminal.

Usage:
    tokview show @someone
    tokview show "https://www.tiktok.com/@someone/video/7301234567890123456" --raw
    tokview classify "#cats"
    tokview serve --port 3000
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import typer

from . import config

app = typer.Typer(add_completion=False, pretty_exceptions_enable=False)


def _setup_logging() -> None:
    logging.basicConfig(
        level=config.get("TOKVIEW_LOG_LEVEL").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@app.command()
def show(
    query: str = typer.Argument(..., help="@handle, #tag, video id, or TikTok URL"),
    raw: bool = typer.Option(False, "--raw", help="Output raw JSON instead of rendered text"),
) -> None:
    """Look up a user, video or tag and print it."""
    sys.stdout.reconfigure(encoding="utf-8")
    _setup_logging()

    from .classifier import classify
    from .client import UpstreamClient
    from .errors import TokviewError
    from .renderer import render_lookup
    from .service import lookup_route

    route = classify(query)
    if route is None:
        typer.echo("Error: empty query.")
        raise typer.Exit(1)

    with UpstreamClient() as client:
        try:
            lookup = lookup_route(client, route)
        except TokviewError as exc:
            typer.echo(f"Error: {exc.message} ({exc.detail})", err=True)
            raise typer.Exit(1)

    if raw:
        typer.echo(json.dumps(lookup.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        typer.echo(render_lookup(lookup))


@app.command("classify")
def classify_cmd(query: str = typer.Argument(..., help="Search text or URL")) -> None:
    """Print the internal path a query maps to."""
    from .classifier import classify

    route = classify(query)
    if route is None:
        typer.echo("Error: empty query.")
        raise typer.Exit(1)
    typer.echo(route.path)


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to listen on (default: TOKVIEW_PORT or 3000)"),
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
) -> None:
    """Run the HTTP front-end."""
    import uvicorn

    _setup_logging()
    port = port or config.get_int("TOKVIEW_PORT")
    logging.getLogger(__name__).info("Tokview starting on port %d", port)
    uvicorn.run("tokview.api:app", host=host, port=port)


if __name__ == "__main__":
    app()
