from __future__ import annotations

import typer
import uvicorn

from fixture_feed.cli.feed import app as feed_app
from fixture_feed.core.config import settings
from fixture_feed.core.logging_config import configure_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(feed_app, name="feed")


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level."),
) -> None:
    configure_logging(log_level)


@app.command("serve")
def serve_cmd(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8000, "--port"),
) -> None:
    """Serve the public feed over HTTP."""

    uvicorn.run("fixture_feed.api.app:create_default_app", factory=True, host=host, port=port)
