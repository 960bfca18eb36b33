"""
Module: reviews.py
Description:
    Ratings and comments, for whole titles and for single episodes.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Comment bodies go through `utils.sanitize.sanitize_comment` before insert.
    Row-level security decides who may write; a refusal comes back as
    ErrorKind.PERMISSION_DENIED. Deletes are scoped to the caller's own rows
    and report ErrorKind.NOT_FOUND when nothing was removed.
"""

from catalog.models import Author, EpisodeComment, EpisodeRating, Review
from catalog.query import delete_owned, fail, safe_query, safe_write
from catalog.result import ErrorKind, Ok, Result
from utils.sanitize import sanitize_comment

RATING_MIN = 1
RATING_MAX = 10

COMMENT_COLUMNS = """
    id,
    anime_id,
    user_id,
    content,
    created_at,
    user:users!comments_user_id_fkey (
        username,
        avatar_url
    )
"""

EPISODE_COMMENT_COLUMNS = """
    id,
    user_id,
    anime_id,
    episode_number,
    content,
    created_at,
    user:users!episode_comments_user_id_fkey (
        username,
        avatar_url
    )
"""


def _author(row: dict) -> Author:
    user = row.get("user") or {}
    return {
        "username": user.get("username") or "Anonymous",
        "avatar_url": user.get("avatar_url"),
    }


def _check_rating(rating) -> str | None:
    if not isinstance(rating, (int, float)) or isinstance(rating, bool):
        return "rating must be a number"
    if not RATING_MIN <= rating <= RATING_MAX:
        return f"rating must be between {RATING_MIN} and {RATING_MAX}"
    return None


def get_anime_reviews(client, anime_id: str) -> Result[list[Review]]:
    """Comments on a title, newest first, each carrying its author's rating (0 if unrated)."""
    comments = safe_query(
        lambda: client.table("comments")
        .select(COMMENT_COLUMNS)
        .eq("anime_id", anime_id)
        .order("created_at", desc=True)
        .execute(),
        context=f"reviews for {anime_id}",
    )
    if not comments.ok:
        return comments

    ratings = safe_query(
        lambda: client.table("ratings").select("user_id, rating").eq("anime_id", anime_id).execute(),
        context=f"ratings for {anime_id}",
    )
    # Reviews are still useful without ratings.
    ratings_by_user = {}
    if ratings.ok:
        ratings_by_user = {row["user_id"]: row["rating"] for row in ratings.value.data or []}

    reviews = [
        {
            "id": row["id"],
            "anime_id": row["anime_id"],
            "user_id": row["user_id"],
            "rating": ratings_by_user.get(row["user_id"]) or 0,
            "content": row["content"],
            "created_at": row["created_at"],
            "user": _author(row),
        }
        for row in comments.value.data or []
    ]
    return Ok(reviews)


def rate_anime(client, user_id: str, anime_id: str, rating) -> Result[None]:
    problem = _check_rating(rating)
    if problem:
        return fail(ErrorKind.INVALID_INPUT, problem, context="rate anime")

    result = safe_write(
        lambda: client.table("ratings")
        .upsert(
            {"user_id": user_id, "anime_id": anime_id, "rating": rating},
            on_conflict="user_id,anime_id",
        )
        .execute(),
        context="rate anime",
    )
    return Ok(None) if result.ok else result


def post_review(client, user_id: str, anime_id: str, content: str) -> Result[None]:
    body = sanitize_comment(content)
    if not body:
        return fail(ErrorKind.INVALID_INPUT, "Review cannot be empty", context="post review")

    result = safe_write(
        lambda: client.table("comments")
        .insert({"user_id": user_id, "anime_id": anime_id, "content": body})
        .execute(),
        context="post review",
    )
    return Ok(None) if result.ok else result


def delete_review(client, user_id: str, comment_id: str) -> Result[None]:
    return delete_owned(client, "comments", comment_id, user_id, context="delete review")


def delete_rating(client, user_id: str, rating_id: str) -> Result[None]:
    return delete_owned(client, "ratings", rating_id, user_id, context="delete rating")


def get_episode_ratings(client, anime_id: str, episode_number: int) -> Result[list[EpisodeRating]]:
    result = safe_query(
        lambda: client.table("episode_ratings")
        .select("*")
        .eq("anime_id", anime_id)
        .eq("episode_number", episode_number)
        .order("created_at", desc=True)
        .execute(),
        context=f"episode {episode_number} ratings",
    )
    if not result.ok:
        return result
    return Ok(result.value.data or [])


def get_episode_comments(client, anime_id: str, episode_number: int) -> Result[list[EpisodeComment]]:
    result = safe_query(
        lambda: client.table("episode_comments")
        .select(EPISODE_COMMENT_COLUMNS)
        .eq("anime_id", anime_id)
        .eq("episode_number", episode_number)
        .order("created_at", desc=True)
        .execute(),
        context=f"episode {episode_number} comments",
    )
    if not result.ok:
        return result

    comments = [
        {
            "id": row["id"],
            "user_id": row["user_id"],
            "anime_id": row["anime_id"],
            "episode_number": row["episode_number"],
            "content": row["content"],
            "created_at": row["created_at"],
            "user": _author(row),
        }
        for row in result.value.data or []
    ]
    return Ok(comments)


def rate_episode(client, user_id: str, anime_id: str, episode_number: int, rating) -> Result[EpisodeRating]:
    """Set (or replace) the caller's rating for one episode and return the stored row."""
    problem = _check_rating(rating)
    if problem:
        return fail(ErrorKind.INVALID_INPUT, problem, context="rate episode")

    result = safe_write(
        lambda: client.table("episode_ratings")
        .upsert(
            {
                "user_id": user_id,
                "anime_id": anime_id,
                "episode_number": episode_number,
                "rating": rating,
            },
            on_conflict="user_id,anime_id,episode_number",
        )
        .execute(),
        context="rate episode",
    )
    if not result.ok:
        return result
    rows = result.value.data or []
    if not rows:
        return fail(ErrorKind.UNKNOWN, "Rating was not returned by the store", context="rate episode")
    return Ok(rows[0])


def post_episode_comment(
    client, user_id: str, anime_id: str, episode_number: int, content: str
) -> Result[None]:
    body = sanitize_comment(content)
    if not body:
        return fail(ErrorKind.INVALID_INPUT, "Comment cannot be empty", context="post episode comment")

    result = safe_write(
        lambda: client.table("episode_comments")
        .insert(
            {
                "user_id": user_id,
                "anime_id": anime_id,
                "episode_number": episode_number,
                "content": body,
            }
        )
        .execute(),
        context="post episode comment",
    )
    return Ok(None) if result.ok else result


def delete_episode_rating(client, user_id: str, rating_id: str) -> Result[None]:
    return delete_owned(client, "episode_ratings", rating_id, user_id, context="delete episode rating")


def delete_episode_comment(client, user_id: str, comment_id: str) -> Result[None]:
    return delete_owned(client, "episode_comments", comment_id, user_id, context="delete episode comment")
