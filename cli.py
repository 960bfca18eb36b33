"""
Module: cli.py
Description:
    Typer-based command-line interface for the AniList → Supabase catalog sync and catalog lookups.

Usage:
    python cli.py [subcommand] [options]

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * SUPABASE_URL
        * SUPABASE_SERVICE_ROLE_KEY / SUPABASE_KEY
    - `sync catalog` exits with status 1 when the run stops on a failing page.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()

app = typer.Typer(help="Anime Index CLI – AniList catalog sync and Supabase lookups.")

# === Sub-apps ===
sync_app = typer.Typer(help="Commands that write the AniList catalog into Supabase.")
catalog_app = typer.Typer(help="Read-only lookups against the anime index.")

app.add_typer(sync_app, name="sync")
app.add_typer(catalog_app, name="catalog")


@app.callback()
def configure(
    debug: bool = typer.Option(False, "--debug", help="Show debug log records."),
):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _client():
    from utils.supabase_client import build_client

    return build_client()


def _render_anime(rows, title: str):
    table = Table(title=title, expand=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="green", overflow="fold")
    table.add_column("Rating", justify="right")
    table.add_column("Year", justify="right")
    table.add_column("Status")
    for row in rows:
        rating = row.get("rating")
        table.add_row(
            row["id"],
            row.get("title") or "—",
            f"{rating:.1f}" if rating is not None else "—",
            str(row.get("year") or "—"),
            row.get("status") or "—",
        )
    console.print(table)


def _fail(result):
    console.print(f"[bold red]❌ {result.kind.value}:[/bold red] {result.message}")
    raise typer.Exit(code=1)


# === SYNC COMMANDS ===
@sync_app.command("catalog")
def sync_catalog():
    """
    Mirror the AniList catalog (most popular first) into the anime_index table.
    Pages are upserted one at a time; a failing page stops the run.
    """
    from syncer.main import main as run_sync

    result = run_sync()
    if not result.ok:
        raise typer.Exit(code=1)


# === CATALOG COMMANDS ===
@catalog_app.command("trending")
def trending(limit: int = typer.Option(6, "--limit", min=1, max=100, help="Number of titles.")):
    """Show the top-rated titles."""
    from catalog.anime import get_trending_anime

    result = get_trending_anime(_client(), limit=limit)
    if not result.ok:
        _fail(result)
    _render_anime(result.value, "🔥 Trending")


@catalog_app.command("search")
def search(
    query: str = typer.Argument(..., help="Title prefix to look for."),
    limit: int = typer.Option(10, "--limit", min=1, max=100),
):
    """Suggest titles starting with QUERY."""
    from catalog.anime import get_search_suggestions

    result = get_search_suggestions(_client(), query, limit=limit)
    if not result.ok:
        _fail(result)
    if not result.value:
        console.print(f"[yellow]⚠️  No titles match '{query}'.[/yellow]")
        return
    for row in result.value:
        console.print(f"[cyan]{row['id']}[/cyan] {row['title']}")


@catalog_app.command("show")
def show(anime_id: str = typer.Argument(..., help="Row id, e.g. anilist-16498.")):
    """Show one title with its details."""
    from catalog.anime import get_anime_by_id

    result = get_anime_by_id(_client(), anime_id)
    if not result.ok:
        _fail(result)

    anime = result.value
    console.print(f"\n[bold white]{anime['title']}[/bold white] [dim]({anime['id']})[/dim]")
    for key in ("rating", "year", "season", "status", "episodes", "genres", "trailer"):
        value = anime.get(key)
        if isinstance(value, list):
            value = ", ".join(value)
        console.print(f"[dim]{key}[/dim]: {value if value not in (None, '') else '—'}")
    if anime.get("description"):
        console.print(f"\n{anime['description']}\n")


@catalog_app.command("health")
def health():
    """Check that Supabase answers queries on the anime index."""
    from catalog.health import check_connection

    if check_connection(_client()):
        console.print("[bold green]✅ Supabase is reachable.[/bold green]")
    else:
        console.print("[bold red]❌ Supabase query failed.[/bold red]")
        raise typer.Exit(code=1)


# === ENTRY POINT ===
if __name__ == "__main__":
    app()
