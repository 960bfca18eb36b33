"""
Module: formatter.py
Description:
    Formatting helpers to transform AniList media payloads into `anime_index` rows.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * None
"""

import re

ID_PREFIX = "anilist"
DESCRIPTION_MAX_LENGTH = 1000
YOUTUBE_SITE = "youtube"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={}"

TAG_PATTERN = re.compile(r"<[^>]*>")

STATUS_MAP = {
    "RELEASING": "airing",
    "FINISHED": "completed",
    "NOT_YET_RELEASED": "upcoming",
    "CANCELLED": "completed",
    "HIATUS": "airing",
}
DEFAULT_STATUS = "completed"

SEASON_MAP = {
    "WINTER": "Winter",
    "SPRING": "Spring",
    "SUMMER": "Summer",
    "FALL": "Fall",
}


def canonical_id(anilist_id) -> str:
    """Namespaced row id, stable across syncs (upsert key)."""
    return f"{ID_PREFIX}-{anilist_id}"


def map_status(status: str | None) -> str:
    return STATUS_MAP.get(status, DEFAULT_STATUS)


def map_season(season: str | None) -> str | None:
    if not season:
        return None
    return SEASON_MAP.get(season)


def rescale_score(average_score) -> float | None:
    """AniList scores are 0-100; the index stores 0-10."""
    if average_score is None:
        return None
    return min(max(average_score / 10, 0.0), 10.0)


def clean_description(description: str | None) -> str | None:
    if not description:
        return None
    stripped = TAG_PATTERN.sub("", description)[:DESCRIPTION_MAX_LENGTH]
    return stripped or None


def build_trailer_url(trailer: dict | None) -> str | None:
    if not trailer:
        return None
    if trailer.get("site") == YOUTUBE_SITE and trailer.get("id"):
        return YOUTUBE_WATCH_URL.format(trailer["id"])
    return None


def format_media_for_index(media: dict) -> dict:
    title_data = media.get("title") or {}
    start_date = media.get("startDate") or {}
    cover = media.get("coverImage") or {}

    return {
        "id": canonical_id(media["id"]),
        "title": title_data.get("english") or title_data.get("romaji"),
        "rating": rescale_score(media.get("averageScore")),
        "genres": list(media.get("genres") or []),
        "year": start_date.get("year"),
        "season": map_season(media.get("season")),
        "status": map_status(media.get("status")),
        "episodes": media.get("episodes"),
        "description": clean_description(media.get("description")),
        "cover_image": cover.get("large"),
        "banner_image": media.get("bannerImage"),
        "trailer": build_trailer_url(media.get("trailer")),
        "anilist_id": media["id"],
    }
