"""
Module: profile.py
Description:
    A user's profile row (`users` table) and their recent activity across
    lists, title ratings, reviews, episode ratings and episode comments.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Activity sections load independently; a section that fails is left empty
    and named in `failed`.
"""

from catalog.models import Profile, ProfileUpdate, UserActivity
from catalog.query import fail, safe_query, safe_write
from catalog.result import ErrorKind, Ok, Result
from utils.sanitize import is_valid_url, sanitize_input

PROFILE_COLUMNS = "id,username,bio,avatar_url"
BIO_MAX_LENGTH = 500
ACTIVITY_LIMIT = 100


def _with_anime(table: str, columns: str) -> str:
    return f"{columns},anime:anime_index!{table}_anime_id_fkey(id,title,cover_image)"


# section -> (table, columns)
ACTIVITY_SECTIONS = {
    "lists": ("lists", "id,name,description,is_private,created_at"),
    "ratings": ("ratings", _with_anime("ratings", "id,rating,created_at")),
    "reviews": ("comments", _with_anime("comments", "id,content,created_at")),
    "episode_ratings": (
        "episode_ratings",
        _with_anime("episode_ratings", "id,rating,episode_number,created_at"),
    ),
    "episode_comments": (
        "episode_comments",
        _with_anime("episode_comments", "id,content,episode_number,created_at"),
    ),
}


def get_profile(client, user_id: str) -> Result[Profile]:
    result = safe_query(
        lambda: client.table("users").select(PROFILE_COLUMNS).eq("id", user_id).single().execute(),
        context="profile",
    )
    if not result.ok:
        return result
    if not result.value.data:
        return fail(ErrorKind.NOT_FOUND, f"No profile for user {user_id}", context="profile")
    return Ok(result.value.data)


def update_profile(
    client,
    user_id: str,
    bio: str | None = None,
    avatar_url: str | None = None,
) -> Result[ProfileUpdate]:
    """Store a new bio and avatar URL. Blank values are stored as null."""
    bio = sanitize_input(bio or "", BIO_MAX_LENGTH) or None
    avatar_url = sanitize_input(avatar_url or "") or None
    if avatar_url and not is_valid_url(avatar_url):
        return fail(ErrorKind.INVALID_INPUT, "Avatar must be an http(s) URL", context="update profile")

    changes = {"bio": bio, "avatar_url": avatar_url}
    result = safe_write(
        lambda: client.table("users").update(changes).eq("id", user_id).execute(),
        context="update profile",
    )
    if not result.ok:
        return result
    if not result.value.data:
        return fail(ErrorKind.NOT_FOUND, f"No profile for user {user_id}", context="update profile")
    return Ok(changes)


def get_user_activity(client, user_id: str, limit: int = ACTIVITY_LIMIT) -> Result[UserActivity]:
    """
    Newest-first rows of every activity section, at most `limit` each.
    Only when every section fails is the first error returned.
    """
    activity = {"failed": []}
    errors = []
    for section, (table, columns) in ACTIVITY_SECTIONS.items():
        result = safe_query(
            lambda: client.table(table)
            .select(columns)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute(),
            context=f"user {section}",
        )
        if result.ok:
            activity[section] = result.value.data or []
        else:
            activity[section] = []
            activity["failed"].append(section)
            errors.append(result)

    if len(errors) == len(ACTIVITY_SECTIONS):
        return errors[0]
    return Ok(activity)
