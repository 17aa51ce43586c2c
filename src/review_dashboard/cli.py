"""Command-line interface."""

import asyncio
import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from review_dashboard import __version__
from review_dashboard.config import settings
from review_dashboard.dashboard import ReviewDashboard
from review_dashboard.errors import InvalidApprovalRequest
from review_dashboard.models.criteria import FilterCriteria, SortSpec
from review_dashboard.models.performance import PropertyPerformance
from review_dashboard.models.result import NormalizedResult
from review_dashboard.models.review import CanonicalReview
from review_dashboard.provider.hostaway import HostawayClient
from review_dashboard.storage import create_approval_store
from review_dashboard.storage.yaml_writer import ReportWriter
from review_dashboard.utils.logging import setup_logging

app = typer.Typer(help="Review Dashboard - Normalize, approve and summarize property reviews")
console = Console()

TREND_MARKERS = {"up": "[green]▲ up[/green]", "down": "[red]▼ down[/red]", "stable": "● stable"}


@contextmanager
def open_dashboard() -> Iterator[ReviewDashboard]:
    """Composition root: pick the approval backend and provider client once.

    Both are closed when the block exits.
    """
    dashboard = ReviewDashboard(
        client=HostawayClient(settings),
        store=create_approval_store(settings),
        settings=settings,
    )
    try:
        yield dashboard
    finally:
        asyncio.run(dashboard.client.close())
        dashboard.store.close()


async def _load_async(dashboard: ReviewDashboard) -> NormalizedResult:
    try:
        return await dashboard.load()
    finally:
        await dashboard.client.close()


def _load(dashboard: ReviewDashboard) -> NormalizedResult:
    """Load reviews, exiting with status 1 if the provider failed."""
    result = asyncio.run(_load_async(dashboard))
    if not result.success:
        console.print(f"[red]Failed to load reviews: {result.error}[/red]")
        raise typer.Exit(1)
    return result


@app.command()
def reviews(
    property_id: Optional[str] = typer.Option(None, "--property", "-p", help="Only this property ID"),
    channel: Optional[str] = typer.Option(None, "--channel", "-c", help="Only this channel"),
    min_rating: Optional[float] = typer.Option(None, "--min-rating", help="Minimum overall rating"),
    max_rating: Optional[float] = typer.Option(None, "--max-rating", help="Maximum overall rating"),
    review_type: str = typer.Option("all", "--type", "-t", help="guest, host or all"),
    status: str = typer.Option("all", "--status", help="published, pending, rejected or all"),
    approved_only: bool = typer.Option(False, "--approved-only", help="Only reviews approved for display"),
    sort_field: str = typer.Option("date", "--sort", "-s", help="date, rating, property or channel"),
    order: str = typer.Option("desc", "--order", "-o", help="asc or desc"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum number to show"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """List normalized reviews with filters and sorting."""
    setup_logging(verbose)

    try:
        criteria = FilterCriteria(
            property_id=property_id,
            channel=channel,
            min_rating=min_rating,
            max_rating=max_rating,
            review_direction=review_type,
            status=status,
            approved_only=approved_only,
        )
        sort = SortSpec(field=sort_field, order=order)
    except ValidationError as e:
        console.print(f"[red]Invalid options: {e}[/red]")
        raise typer.Exit(2)

    with open_dashboard() as dashboard:
        result = dashboard.query(_load(dashboard), criteria, sort)
    shown = result.reviews[:limit] if limit is not None else result.reviews

    if as_json:
        data = result.model_copy(update={"reviews": shown}).to_dict()
        console.print_json(json.dumps(data))
        return

    _print_reviews(shown, title=f"Showing {len(shown)} of {result.meta.unfiltered_total} reviews")


@app.command()
def properties(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Show performance for every property."""
    setup_logging(verbose)

    with open_dashboard() as dashboard:
        performance = dashboard.performance(_load(dashboard))
    _print_performance(performance)


@app.command()
def stats(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Show headline review statistics."""
    setup_logging(verbose)

    with open_dashboard() as dashboard:
        overview = dashboard.stats(_load(dashboard))

    table = Table(title="Review Overview")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Total Reviews", f"{overview.total_reviews} ({overview.property_count} properties)")
    table.add_row("Average Rating", f"{overview.average_rating:.1f}")
    table.add_row("Five-star Reviews", str(overview.five_star_count))
    table.add_row("Published", f"{overview.approved_count} ({overview.approved_percent}%)")
    table.add_row("Needs Attention (≤ 2 stars)", str(overview.low_rating_count))

    console.print(table)


@app.command()
def show(
    property_id: str = typer.Argument(..., help="Property ID"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Show the reviews a property's public page displays."""
    setup_logging(verbose)

    with open_dashboard() as dashboard:
        result = _load(dashboard)
        shown = dashboard.public_reviews(result, property_id)

    prop = next((p for p in result.meta.properties if p.id == property_id), None)
    if prop is None:
        console.print(f"[red]Property not found: {property_id}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold blue]{prop.name}[/bold blue]")
    if prop.location:
        console.print(f"Location: {prop.location}")
    console.print()

    if not shown:
        console.print("[yellow]No approved reviews yet[/yellow]")
        return

    for review in shown:
        console.print(
            f"[bold]{review.reviewer_initials}[/bold] {review.reviewer or 'Guest'} · "
            f"{review.overall_rating:.1f}/5 · {review.channel_display_name} · "
            f"{review.submitted_at_formatted}"
        )
        console.print(f"  {review.content}")
        console.print()


@app.command()
def approve(
    review_id: str = typer.Argument(..., help="Review ID to show publicly"),
):
    """Approve a review for public display."""
    _set_approval(review_id, True)


@app.command()
def unapprove(
    review_id: str = typer.Argument(..., help="Review ID to hide"),
):
    """Remove a review from public display."""
    _set_approval(review_id, False)


def _set_approval(review_id: str, approved: bool) -> None:
    with open_dashboard() as dashboard:
        try:
            outcome = dashboard.set_approval({"reviewId": review_id, "approved": approved})
        except InvalidApprovalRequest as e:
            console.print(f"[red]{e.message}[/red]")
            raise typer.Exit(1)

    verb = "Approved" if outcome.approved else "Unapproved"
    console.print(f"[green]{verb} review {outcome.review_id}[/green] ({outcome.total_approved} approved)")


@app.command()
def approvals(
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """List approved review IDs."""
    with open_dashboard() as dashboard:
        snapshot = dashboard.approvals()

    if as_json:
        console.print_json(json.dumps(snapshot.to_dict()))
        return

    console.print(f"[bold]{snapshot.total_approved} approved reviews[/bold]")
    console.print(f"Last updated: {snapshot.last_updated or 'never'}")
    for review_id in snapshot.approved_review_ids:
        console.print(f"  {review_id}")


@app.command()
def export(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory for the YAML report",
    ),
    include_reviews: bool = typer.Option(
        False,
        "--include-reviews",
        help="Include every normalized review in the report",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Write a YAML report of stats and property performance."""
    setup_logging(verbose)

    with open_dashboard() as dashboard:
        result = _load(dashboard)
        writer = ReportWriter(output or settings.output_dir)
        path = writer.write_report(
            result,
            dashboard.stats(result),
            dashboard.performance(result),
            include_reviews=include_reviews,
        )
    console.print(f"[green]✓ Saved: {path}[/green]")


@app.command()
def version():
    """Show version information."""
    console.print(f"Review Dashboard v{__version__}")


def _print_reviews(shown: List[CanonicalReview], title: str) -> None:
    """Print reviews as a table."""
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Date", style="yellow")
    table.add_column("Property", style="green")
    table.add_column("Guest")
    table.add_column("Type")
    table.add_column("Channel")
    table.add_column("Rating", justify="right")
    table.add_column("Status")
    table.add_column("Public", justify="center")

    for review in shown:
        table.add_row(
            review.id,
            review.submitted_at_formatted,
            review.property.short_name,
            review.reviewer or "—",
            review.direction,
            review.channel_display_name,
            f"{review.overall_rating:.1f}",
            review.status,
            "✓" if review.is_approved_for_display else "",
        )

    console.print(table)


def _print_performance(performance: List[PropertyPerformance]) -> None:
    """Print property performance as a table."""
    table = Table(title="Property Performance")
    table.add_column("Property", style="cyan")
    table.add_column("Reviews", justify="right")
    table.add_column("Average", justify="right", style="green")
    table.add_column("Trend")
    table.add_column("Public", justify="right")
    table.add_column("Pending", justify="right")
    table.add_column("Channels")

    for perf in performance:
        channels = ", ".join(f"{name} {count}" for name, count in perf.channel_breakdown.items())
        table.add_row(
            perf.property.short_name,
            str(perf.total_reviews),
            f"{perf.average_rating:.1f}",
            TREND_MARKERS[perf.recent_trend],
            str(perf.approved_count),
            str(perf.pending_count),
            channels,
        )

    console.print(table)


if __name__ == "__main__":
    app()
