"""
Module: moderation.py
Description:
    Admin review queue for title comments: list, delete, and dismiss reports.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from catalog.models import ModeratedComment
from catalog.query import safe_query, safe_write
from catalog.result import Ok, Result

MODERATION_COLUMNS = """
    id,
    user_id,
    content,
    created_at,
    reported,
    user:users!comments_user_id_fkey (
        username
    )
"""


def get_comments_for_review(client, reported_only: bool = False) -> Result[list[ModeratedComment]]:
    def execute():
        query = client.table("comments").select(MODERATION_COLUMNS)
        if reported_only:
            query = query.eq("reported", True)
        return query.order("created_at", desc=True).execute()

    result = safe_query(execute, context="moderation queue")
    if not result.ok:
        return result

    comments = [
        {
            "id": row["id"],
            "user_id": row["user_id"],
            "content": row["content"],
            "created_at": row["created_at"],
            "reported": bool(row.get("reported")),
            "username": (row.get("user") or {}).get("username") or "Anonymous",
        }
        for row in result.value.data or []
    ]
    return Ok(comments)


def delete_comment(client, comment_id: str) -> Result[None]:
    result = safe_write(
        lambda: client.table("comments").delete().eq("id", comment_id).execute(),
        context="delete comment",
    )
    return Ok(None) if result.ok else result


def dismiss_report(client, comment_id: str) -> Result[None]:
    result = safe_write(
        lambda: client.table("comments").update({"reported": False}).eq("id", comment_id).execute(),
        context="dismiss report",
    )
    return Ok(None) if result.ok else result
