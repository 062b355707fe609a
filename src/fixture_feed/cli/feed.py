from __future__ import annotations

import asyncio
import json

import typer

from fixture_feed.cli.common import feed_service_scope
from fixture_feed.feed.aggregator import AggregationResult
from fixture_feed.feed.tournaments import build_tournament_digests
from fixture_feed.ingestion.providers.base.errors import ProviderError

app = typer.Typer(help="Aggregate the fixture feed from every upstream source.")


async def _load() -> AggregationResult:
    async with feed_service_scope() as service:
        return await service.get_result()


def _load_or_exit() -> AggregationResult:
    try:
        return asyncio.run(_load())
    except ProviderError as exc:
        typer.echo(f"Failed to load events: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("events")
def events_cmd(
    public: bool = typer.Option(
        False,
        "--public/--full",
        help="Omit internal-only fields (venue, location, status, subtitle).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the feed as JSON."),
) -> None:
    """Fetch, merge and print the time-ordered event feed."""

    result = _load_or_exit()

    if as_json:
        rows = result.public_events() if public else result.full_events()
        typer.echo(json.dumps({"events": rows}, indent=2, ensure_ascii=False))
    else:
        for event in result.events:
            parts = [event.start_time_utc, f"[{event.source}]", event.title]
            if event.result:
                parts.append(f"({event.result}{' ' + event.outcome if event.outcome else ''})")
            typer.echo(" ".join(parts))

    typer.echo(f"events={len(result.events)}", err=True)
    for source, reason in result.failures.items():
        typer.echo(f"  failed {source}: {reason}", err=True)


@app.command("tournaments")
def tournaments_cmd() -> None:
    """Summarize the feed per source and tournament."""

    result = _load_or_exit()
    for digest in build_tournament_digests(result.events):
        upcoming = digest.to_dict()["nextDateUTC"] or "-"
        typer.echo(
            " ".join(
                [
                    f"[{digest.source}]",
                    digest.name,
                    f"events={digest.event_count}",
                    f"next={upcoming}",
                ]
            )
        )
