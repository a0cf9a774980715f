"""CLI commands for tracker code lookups.

``track`` resolves a full tracker code the way a tracker link does;
``search`` lists suggestions for a partial code the way the search box does.
"""

import asyncio
from typing import Annotated

import typer

from ballot_tracker.schemas.tracking import DisplayState

_EXIT_CODES = {
    DisplayState.CONFIRMED: 0,
    DisplayState.SPOILED: 0,
    DisplayState.UNKNOWN: 1,
    DisplayState.LOADING: 2,
}


def _resolve_election_id(election_id: str | None) -> str:
    from ballot_tracker.core.config import get_settings

    resolved = election_id or get_settings().election_id
    if not resolved:
        msg = "No election given; pass --election-id or set ELECTION_ID"
        raise typer.BadParameter(msg, param_hint="--election-id")
    return resolved


def track(
    tracker: Annotated[str, typer.Argument(help="Tracker code printed on the ballot receipt")],
    election_id: Annotated[str | None, typer.Option("--election-id", help="Election to search")] = None,
) -> None:
    """Show whether the ballot for a tracker code was cast or spoiled."""
    eid = _resolve_election_id(election_id)
    state = asyncio.run(_track_impl(tracker, eid))
    raise typer.Exit(_EXIT_CODES[state])


async def _track_impl(tracker: str, election_id: str) -> DisplayState:
    """Async implementation of the track command."""
    from ballot_tracker.core.config import get_settings
    from ballot_tracker.lib.tracker_search import is_eligible_query, normalize_query
    from ballot_tracker.services.tracker_service import TrackerResultView, build_client, build_lookup

    settings = get_settings()
    if not is_eligible_query(normalize_query(tracker), settings.search_minimum_query_length):
        typer.echo(f"Tracker code must contain at least {settings.search_minimum_query_length} characters", err=True)
        return DisplayState.UNKNOWN

    async with build_client(settings, election_id) as client:
        lookup = build_lookup(settings, client.search_ballots)
        try:
            async with TrackerResultView(
                lookup,
                tracker,
                minimum_query_length=settings.search_minimum_query_length,
            ) as view:
                view.open()
                state = await view.wait_until_settled(settings.track_wait_timeout)
                if view.error is not None:
                    typer.echo(f"Lookup failed: {view.error}", err=True)
        finally:
            await lookup.aclose()

    typer.echo(f"{tracker}: {state}")
    return state


def search(
    query: Annotated[str, typer.Argument(help="Full or partial tracker code")],
    election_id: Annotated[str | None, typer.Option("--election-id", help="Election to search")] = None,
) -> None:
    """List ballots whose tracker code matches a partial code."""
    eid = _resolve_election_id(election_id)
    found = asyncio.run(_search_impl(query, eid))
    if not found:
        raise typer.Exit(1)


async def _search_impl(query: str, election_id: str) -> bool:
    """Async implementation of the search command."""
    from ballot_tracker.core.config import get_settings
    from ballot_tracker.lib.tracker_search import is_eligible_query, normalize_query
    from ballot_tracker.services.tracker_service import TrackerSuggestions, build_client, build_lookup

    settings = get_settings()
    if not is_eligible_query(normalize_query(query), settings.search_minimum_query_length):
        typer.echo(f"Query must contain at least {settings.search_minimum_query_length} characters", err=True)
        return False

    async with build_client(settings, election_id) as client:
        lookup = build_lookup(settings, client.search_ballots)
        try:
            async with TrackerSuggestions.from_settings(lookup, settings) as suggestions:
                suggestions.on_input(query)
                view = await suggestions.wait_until_settled(settings.track_wait_timeout)
                shown = suggestions.suggestions
        finally:
            await lookup.aclose()

    if view.error is not None:
        typer.echo(f"Lookup failed: {view.error}", err=True)
    if not shown:
        typer.echo("No ballots found")
        return False
    for ballot in shown:
        typer.echo(f"  {ballot.tracker_words} ({ballot.state})")
    return True
