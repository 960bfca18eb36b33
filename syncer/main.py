"""
Module: main.py
Description:
    High-level sync entry point that mirrors the AniList catalog into Supabase, page by page.

Usage:
    python cli.py sync catalog

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * SUPABASE_URL
        * SUPABASE_SERVICE_ROLE_KEY / SUPABASE_KEY
        * SYNC_PAGE_SIZE
        * SYNC_PAGE_DELAY
    - Stops at the first failing page. Pages synced before it stay in the table;
      re-running converges because rows are upserted by id.
"""

import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console

from syncer.anilist_fetcher import fetch_page
from syncer.formatter import format_media_for_index
from syncer.supabase_updater import upsert_anime_batch
from utils.supabase_client import build_client

console = Console()

# === Load .env ===
base_path = Path(__file__).resolve().parent
env_path = base_path.parent / ".env"
load_dotenv(dotenv_path=env_path)

SYNC_PAGE_SIZE = int(os.getenv("SYNC_PAGE_SIZE", 50))
SYNC_PAGE_DELAY = float(os.getenv("SYNC_PAGE_DELAY", 1.0))


class SyncState(str, Enum):
    IDLE = "idle"
    FETCHING_PAGE = "fetching_page"
    TRANSFORMING = "transforming"
    UPSERTING = "upserting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SyncResult:
    state: SyncState = SyncState.IDLE
    total_synced: int = 0
    pages_synced: int = 0
    failed_page: int | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.state is SyncState.DONE


def run_sync(client, per_page: int = SYNC_PAGE_SIZE, delay: float = SYNC_PAGE_DELAY) -> SyncResult:
    """
    Fetch → format → upsert every catalog page, starting at page 1.

    The loop continues while AniList reports another page and the last batch
    was non-empty. Any error ends the run in the FAILED state.
    """
    result = SyncResult()
    page = 1

    console.print("[bold white]\n📚 AniList → Supabase | Catalog Sync[/bold white]\n")

    while True:
        try:
            result.state = SyncState.FETCHING_PAGE
            console.print(f"[bold white]🔎 Fetching page {page}...[/bold white]")
            catalog_page = fetch_page(page, per_page)

            if not catalog_page.media:
                console.print("[dim]No more data to fetch[/dim]")
                result.state = SyncState.DONE
                break

            result.state = SyncState.TRANSFORMING
            rows = [format_media_for_index(media) for media in catalog_page.media]

            result.state = SyncState.UPSERTING
            console.print(f"[cyan]📦 Syncing {len(rows)} anime to Supabase...[/cyan]")
            upsert_anime_batch(client, rows)
        except Exception as e:
            console.print(f"[bold red]❌ Error syncing page {page}:[/bold red] {e}")
            result.state = SyncState.FAILED
            result.failed_page = page
            result.error = e
            break

        result.total_synced += len(rows)
        result.pages_synced += 1
        console.print(
            f"[bold green]✅ Synced {result.total_synced} anime so far...[/bold green]"
        )

        if not catalog_page.has_next_page:
            result.state = SyncState.DONE
            break

        page += 1
        time.sleep(delay)

    console.print(f"\n[bold cyan]📝 Sync complete! Total anime synced: {result.total_synced}[/bold cyan]")
    if result.state is SyncState.FAILED:
        console.print(f"[bold yellow]⚠️  Run stopped at page {result.failed_page}[/bold yellow]\n")

    return result


def main() -> SyncResult:
    client = build_client()
    return run_sync(client)


if __name__ == "__main__":
    main()
