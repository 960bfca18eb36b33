"""
Module: anime.py
Description:
    Read access to the `anime_index` table: browse, paginate, search and the landing-page shelves.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from datetime import date

from postgrest.types import CountMethod

from catalog.models import Anime, AnimeFilters, AnimeSuggestion, PaginatedAnime
from catalog.query import safe_query
from catalog.result import Err, ErrorKind, Ok, Result
from syncer.supabase_updater import ANIME_TABLE
from utils.sanitize import escape_like, sanitize_search_query

GENRES = [
    "Action",
    "Adventure",
    "Comedy",
    "Drama",
    "Fantasy",
    "Horror",
    "Mystery",
    "Romance",
    "Sci-Fi",
    "Slice of Life",
    "Sports",
    "Supernatural",
    "Thriller",
]
SEASONS = ["Winter", "Spring", "Summer", "Fall"]
STATUSES = ["all", "airing", "completed", "upcoming"]


def years(count: int = 25, latest: int | None = None) -> list[int]:
    """Release years offered by the browse filters, newest first."""
    latest = latest or date.today().year
    return [latest - i for i in range(count)]


def _apply_filters(query, filters: AnimeFilters | None):
    if not filters:
        return query
    if filters.status and filters.status != "all":
        query = query.eq("status", filters.status)
    if filters.year:
        query = query.eq("year", filters.year)
    if filters.season:
        query = query.eq("season", filters.season)
    if filters.genres:
        query = query.ov("genres", list(filters.genres))
    if filters.query and filters.query.strip():
        term = escape_like(sanitize_search_query(filters.query))
        query = query.ilike("title", f"%{term}%")
    return query


def get_anime_list(client, filters: AnimeFilters | None = None) -> Result[list[Anime]]:
    def execute():
        query = _apply_filters(client.table(ANIME_TABLE).select("*"), filters)
        return query.order("rating", desc=True).execute()

    result = safe_query(execute, context="anime list")
    if not result.ok:
        return result
    return Ok(result.value.data or [])


def get_anime_list_paginated(
    client,
    filters: AnimeFilters | None = None,
    page: int = 1,
    page_size: int = 24,
) -> Result[PaginatedAnime]:
    """
    One page of browse results with the exact total count.

    Pages are 1-based; `has_more` is true while rows remain past this page.
    """
    if page < 1 or page_size < 1:
        return Err(ErrorKind.INVALID_INPUT, "page and page_size must be positive")

    start = (page - 1) * page_size
    end = start + page_size - 1

    def execute():
        query = client.table(ANIME_TABLE).select("*", count=CountMethod.exact)
        query = _apply_filters(query, filters)
        return query.order("rating", desc=True).range(start, end).execute()

    result = safe_query(execute, context="anime page")
    if not result.ok:
        return result

    total_count = result.value.count or 0
    return Ok(
        PaginatedAnime(
            data=result.value.data or [],
            has_more=total_count > end + 1,
            total_count=total_count,
            total_pages=-(-total_count // page_size),
        )
    )


def get_anime_by_id(client, anime_id: str) -> Result[Anime]:
    result = safe_query(
        lambda: client.table(ANIME_TABLE).select("*").eq("id", anime_id).limit(1).execute(),
        context=f"anime {anime_id}",
    )
    if not result.ok:
        return result
    rows = result.value.data or []
    if not rows:
        return Err(ErrorKind.NOT_FOUND, f"Anime {anime_id} not found")
    return Ok(rows[0])


def _top_rated(client, limit: int, context: str, status: str | None = None) -> Result[list[Anime]]:
    def execute():
        query = client.table(ANIME_TABLE).select("*")
        if status:
            query = query.eq("status", status)
        return query.order("rating", desc=True).limit(limit).execute()

    result = safe_query(execute, context=context)
    if not result.ok:
        return result
    return Ok(result.value.data or [])


def get_trending_anime(client, limit: int = 6) -> Result[list[Anime]]:
    return _top_rated(client, limit, "trending anime")


def get_fan_favorites(client, limit: int = 12) -> Result[list[Anime]]:
    return _top_rated(client, limit, "fan favorites")


def get_airing_now(client, limit: int = 12) -> Result[list[Anime]]:
    return _top_rated(client, limit, "airing now", status="airing")


def get_upcoming(client, limit: int = 12) -> Result[list[Anime]]:
    result = safe_query(
        lambda: client.table(ANIME_TABLE)
        .select("*")
        .eq("status", "upcoming")
        .order("year")
        .limit(limit)
        .execute(),
        context="upcoming anime",
    )
    if not result.ok:
        return result
    return Ok(result.value.data or [])


def get_search_suggestions(client, query: str, limit: int = 10) -> Result[list[AnimeSuggestion]]:
    """Title prefix matches for the search box; a blank query never hits the store."""
    term = sanitize_search_query(query or "")
    if not term:
        return Ok([])

    result = safe_query(
        lambda: client.table(ANIME_TABLE)
        .select("id, title, cover_image, genres")
        .ilike("title", f"{escape_like(term)}%")
        .order("rating", desc=True)
        .limit(limit)
        .execute(),
        context="search suggestions",
    )
    if not result.ok:
        return result
    return Ok(result.value.data or [])
