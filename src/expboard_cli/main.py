"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.table import Table

from expboard_core.config.settings import Settings
from expboard_core.constants import PAGE_SIZE_OPTIONS, RADIUS_ANY, RADIUS_OPTIONS
from expboard_core.interfaces.source import OpportunitySource
from expboard_core.models.results import SearchPage
from expboard_core.models.search import (
    FACET_VALUE_TYPES,
    Coordinates,
    FacetName,
    Filters,
    SearchRequest,
)
from expboard_search.observability import configure_logging, configure_tracing
from expboard_search.pipeline import create_resolver, create_search_pipeline
from expboard_search.query_params import to_query_string

app = typer.Typer(
    name="expboard",
    help="Search experience postings by text, location, radius and facets",
)
console = Console()
logger = structlog.get_logger()

VERSION = "0.1.0"

_RADIUS_CHOICES = ", ".join(str(km) for km, _ in RADIUS_OPTIONS if km != RADIUS_ANY)
_RADIUS_HELP = f"Radius in km ({_RADIUS_CHOICES}), {RADIUS_ANY} for any distance"
_PAGE_SIZE_HELP = f"Results per page ({', '.join(map(str, PAGE_SIZE_OPTIONS))})"


def _load_settings(verbose: bool) -> Settings:
    settings = Settings()  # type: ignore[call-arg]
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    configure_tracing(settings)
    return settings


def _build_request(
    query: str,
    location: str,
    radius: int,
    lat: float | None,
    lng: float | None,
) -> SearchRequest:
    origin = None
    if lat is not None and lng is not None:
        origin = Coordinates(lat=lat, lng=lng)
    return SearchRequest(query=query, location=location, radius_km=radius, origin=origin)


def _build_filters(selected: dict[FacetName, list[str]]) -> Filters:
    filters = Filters()
    for facet, values in selected.items():
        for value in values:
            filters.values_for(facet).add(FACET_VALUE_TYPES[facet](value))
    return filters


@app.command()
def search(
    query: str = typer.Argument("", help="Free-text query"),
    location: str = typer.Option("", "--location", "-l", help="Location text or 'Remote'"),
    radius: int = typer.Option(RADIUS_ANY, "--radius", "-r", help=_RADIUS_HELP),
    lat: float | None = typer.Option(None, "--lat", help="Origin latitude"),
    lng: float | None = typer.Option(None, "--lng", help="Origin longitude"),
    industry: list[str] = typer.Option([], "--industry", help="Industry facet value"),
    skill_level: list[str] = typer.Option([], "--skill-level", help="Skill level facet value"),
    location_type: list[str] = typer.Option(
        [], "--location-type", help="Location type facet value"
    ),
    duration: list[str] = typer.Option([], "--duration", help="Duration facet value"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    page_size: int | None = typer.Option(None, "--page-size", help=_PAGE_SIZE_HELP),
    jobs_file: Path | None = typer.Option(
        None, "--jobs-file", help="JSON file of postings instead of the database", exists=True
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Search postings and print one page of results."""
    settings = _load_settings(verbose)

    try:
        request = _build_request(query, location, radius, lat, lng)
        filters = _build_filters(
            {
                FacetName.INDUSTRY: industry,
                FacetName.SKILL_LEVEL: skill_level,
                FacetName.LOCATION_TYPE: location_type,
                FacetName.DURATION: duration,
            }
        )
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if page_size is not None and page_size < 1:
        console.print("[red]Error:[/red] --page-size must be at least 1")
        raise typer.Exit(code=1)

    result = asyncio.run(_run_search(settings, request, filters, page, page_size, jobs_file))
    if result is None:
        console.print("[yellow]Search superseded[/yellow]")
        raise typer.Exit(code=1)

    _print_page(result)


@app.command()
def geocode(
    locations: list[str] = typer.Argument(..., help="Location strings to resolve"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Resolve locations to coordinates."""
    settings = _load_settings(verbose)
    resolved = asyncio.run(create_resolver(settings).resolve_many(locations))

    table = Table(title="Geocoded locations")
    table.add_column("Input")
    table.add_column("Latitude", justify="right")
    table.add_column("Longitude", justify="right")
    table.add_column("Place")
    for text in locations:
        geo = resolved.get(text)
        if geo is None:
            table.add_row(text, "-", "-", "[dim]unresolved[/dim]")
        else:
            table.add_row(text, f"{geo.lat:.4f}", f"{geo.lng:.4f}", geo.display_name)
    console.print(table)


@app.command()
def params(
    query: str = typer.Argument("", help="Free-text query"),
    location: str = typer.Option("", "--location", "-l", help="Location text"),
    radius: int = typer.Option(RADIUS_ANY, "--radius", "-r", help=_RADIUS_HELP),
    lat: float | None = typer.Option(None, "--lat", help="Origin latitude"),
    lng: float | None = typer.Option(None, "--lng", help="Origin longitude"),
) -> None:
    """Print the deep-link query string for a search."""
    try:
        request = _build_request(query, location, radius, lat, lng)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(to_query_string(request), markup=False, highlight=False)


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"expboard-search v{VERSION}")


async def _open_source(settings: Settings, jobs_file: Path | None) -> OpportunitySource:
    """JSON file source when given, otherwise the database."""
    if jobs_file is not None:
        from expboard_search.tools.json_source import JsonFileOpportunitySource

        return JsonFileOpportunitySource(jobs_file)

    from expboard_infra.db.engine import create_engine
    from expboard_infra.db.repositories.opportunity_repo import RepositoryOpportunitySource
    from expboard_infra.db.session import create_session_factory, init_db

    engine = create_engine(settings)
    await init_db(engine)
    return RepositoryOpportunitySource(create_session_factory(engine))


async def _run_search(
    settings: Settings,
    request: SearchRequest,
    filters: Filters,
    page_number: int,
    page_size: int | None,
    jobs_file: Path | None,
) -> SearchPage | None:
    source = await _open_source(settings, jobs_file)
    postings = await source.list_active()
    pipeline = create_search_pipeline(settings, source)
    return await pipeline.run(
        request,
        postings,
        filters=filters,
        page_size=page_size,
        page_number=page_number,
    )


def _print_page(result: SearchPage) -> None:
    page = result.page
    if page.is_empty:
        console.print("[yellow]No opportunities match this search[/yellow]")
    else:
        table = Table(title="Opportunities")
        table.add_column("ID", style="dim")
        table.add_column("Title", style="bold")
        table.add_column("Company")
        table.add_column("Location")
        table.add_column("Type")
        table.add_column("Level")
        table.add_column("Duration")
        for posting in page.items:
            table.add_row(
                posting.id,
                posting.title,
                posting.company_name,
                posting.location_text or "-",
                posting.location_type.value,
                posting.skill_level.value,
                posting.duration_label or "-",
            )
        console.print(table)

    console.print(
        f"Page {page.page_number} of {page.total_pages} "
        f"({page.total_items} result{'s' if page.total_items != 1 else ''})"
    )
    if result.origin is not None:
        console.print(
            f"[dim]Origin: {result.origin.display_name} "
            f"({result.origin.lat:.4f}, {result.origin.lng:.4f})[/dim]"
        )
    if result.semantic.error:
        console.print(f"[yellow]Semantic search unavailable:[/yellow] {result.semantic.error}")


if __name__ == "__main__":
    app()
