"""CLI tool for running and inspecting gym data updates."""
import asyncio
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import settings
from ..models import UpdateCycleStats, UpdateStrategy
from ..services import AutoUpdateScheduler, JsonGymStore, query_planner

app = typer.Typer()
console = Console()


def create_stats_display(stats: UpdateCycleStats) -> Table:
    """Create a rich table displaying cycle statistics."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="cyan bold", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Total", str(stats.total))
    table.add_row("Updated", f"[green]{stats.success_count}[/green]")
    table.add_row("Failed", f"[red]{stats.failure_count}[/red]")
    table.add_row("Success Rate", f"{stats.success_rate:.1f}%")

    return table


@app.command()
def run(
    strategy: Optional[UpdateStrategy] = typer.Option(
        None, help="Update strategy (defaults to AUTO_UPDATE_TYPE)"
    ),
    store_path: Optional[str] = typer.Option(None, help="Gym store JSON file"),
):
    """
    Run one update cycle against the local gym store.

    Examples:

        gym-enricher run

        gym-enricher run --strategy multisource
    """
    store = JsonGymStore(Path(store_path) if store_path else settings.store_path)
    scheduler = AutoUpdateScheduler(store=store, config=settings.schedule_config())

    stats = asyncio.run(scheduler.run_manual_update(strategy))

    if stats is None:
        console.print("[yellow]Update skipped or failed; see logs above[/yellow]")
        raise typer.Exit(1)

    console.print("\n")
    console.print(Panel(create_stats_display(stats), title="[green]Update Complete", border_style="green"))

    if stats.failed_names:
        console.print(f"\n[red]No match for {len(stats.failed_names)} gyms:[/red]")
        for name in stats.failed_names:
            console.print(f"  - {name}")


@app.command()
def plan(name: str = typer.Argument(..., help="Gym name as stored")):
    """Show the search queries generated for a gym name."""
    queries = query_planner.plan(name)
    if not queries:
        console.print("[red]Name is empty after cleaning[/red]")
        raise typer.Exit(1)

    for i, query in enumerate(queries, 1):
        console.print(f"  {i}. {query}")


@app.command()
def status(api_url: str = typer.Option("http://localhost:8000", help="API base URL")):
    """Show the scheduler status of a running server."""
    try:
        response = httpx.get(f"{api_url}/api/scheduler/status", timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        console.print(f"[red]Error getting status: {e.response.text}[/red]")
        raise typer.Exit(1)
    except httpx.RequestError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    data = response.json()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="cyan bold", no_wrap=True)
    table.add_column("Value", style="white")

    running = "[blue]RUNNING[/blue]" if data.get("is_running") else "idle"
    table.add_row("Enabled", str(data.get("enabled")))
    table.add_row("Strategy", str(data.get("strategy")))
    table.add_row("Schedule", f"{data.get('schedule')} every {data.get('interval_days')} days")
    table.add_row("Next Run", str(data.get("next_run") or "-"))
    table.add_row("State", running)

    console.print(Panel(table, title="Auto-update Scheduler"))


if __name__ == "__main__":
    app()
