"""
Module: supabase_updater.py
Description:
    Writes formatted anime rows into the Supabase `anime_index` table (upsert keyed on `id`).

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * ANIME_TABLE
"""

import os
from pathlib import Path

import httpx
from dotenv import load_dotenv
from postgrest.exceptions import APIError
from postgrest.types import ReturnMethod

from utils.errors import PersistenceError

# === Load .env ===
base_path = Path(__file__).resolve().parent
env_path = base_path.parent / ".env"
load_dotenv(dotenv_path=env_path)

ANIME_TABLE = os.getenv("ANIME_TABLE", "anime_index")


def upsert_anime_batch(client, rows: list[dict], table: str = ANIME_TABLE) -> int:
    """
    Upserts a batch of rows, overwriting any existing row with the same id.
    Returns the number of rows sent.
    """
    if not rows:
        return 0

    try:
        client.table(table).upsert(
            rows,
            on_conflict="id",
            ignore_duplicates=False,
            returning=ReturnMethod.minimal,
        ).execute()
    except APIError as e:
        raise PersistenceError(f"Supabase upsert error: {e.message}") from e
    except httpx.HTTPError as e:
        raise PersistenceError(f"Supabase upsert failed: {e}") from e

    return len(rows)
