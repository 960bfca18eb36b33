"""
Module: anilist_fetcher.py
Description:
    Low-level AniList integration: fetches one page of the popularity-sorted anime catalog (GraphQL).

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * ANILIST_API_URL
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import requests
from dotenv import load_dotenv

from utils.errors import SourceProtocolError, SourceUnavailable

# === Load .env ===
base_path = Path(__file__).resolve().parent
env_path = base_path.parent / ".env"
load_dotenv(dotenv_path=env_path)

ANILIST_API_URL = os.getenv("ANILIST_API_URL", "https://graphql.anilist.co")
DEFAULT_PAGE_SIZE = 50

ANILIST_QUERY = """
query ($page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    pageInfo {
      total
      currentPage
      hasNextPage
    }
    media(type: ANIME, sort: POPULARITY_DESC) {
      id
      title {
        romaji
        english
      }
      averageScore
      genres
      startDate {
        year
      }
      season
      status
      episodes
      description
      coverImage {
        large
      }
      bannerImage
      trailer {
        id
        site
      }
    }
  }
}
"""


@dataclass
class CatalogPage:
    """One page of AniList media plus its continuation flag."""

    page: int
    media: list[dict] = field(default_factory=list)
    has_next_page: bool = False
    total: int | None = None


def fetch_page(page: int, per_page: int = DEFAULT_PAGE_SIZE, session=None) -> CatalogPage:
    """
    Fetches a single catalog page from AniList.

    Raises SourceUnavailable when the request itself fails and
    SourceProtocolError when AniList reports GraphQL errors.
    """
    http = session or requests
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    variables = {"page": page, "perPage": per_page}

    try:
        response = http.post(
            ANILIST_API_URL,
            json={"query": ANILIST_QUERY, "variables": variables},
            headers=headers,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceUnavailable(f"AniList API error on page {page}: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise SourceProtocolError(f"AniList returned a non-JSON body on page {page}") from e

    if payload.get("errors"):
        raise SourceProtocolError(f"AniList GraphQL errors: {payload['errors']}")

    page_data = (payload.get("data") or {}).get("Page")
    if not page_data:
        raise SourceProtocolError(f"AniList response for page {page} has no Page payload")

    page_info = page_data.get("pageInfo") or {}
    return CatalogPage(
        page=page_info.get("currentPage") or page,
        media=page_data.get("media") or [],
        has_next_page=bool(page_info.get("hasNextPage")),
        total=page_info.get("total"),
    )
