"""
Module: health.py
Description:
    Connectivity check against the `anime_index` table.

Usage:
    python cli.py catalog health
"""

from catalog.query import safe_query
from syncer.supabase_updater import ANIME_TABLE


def check_connection(client) -> bool:
    result = safe_query(
        lambda: client.table(ANIME_TABLE).select("id").limit(1).execute(),
        context="health check",
        retries=0,
    )
    return result.ok
