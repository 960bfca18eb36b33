"""
Module: lists.py
Description:
    User-curated anime lists (`lists` and `list_items` tables).

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from catalog.models import ListItem, UserList
from catalog.query import delete_owned, fail, safe_query, safe_write
from catalog.result import ErrorKind, Ok, Result
from utils.sanitize import sanitize_input

LIST_COLUMNS = "id,name,description,is_private"
LIST_ITEM_COLUMNS = """
    id,
    anime_id,
    anime:anime_index!list_items_anime_id_fkey (
        id,
        title,
        cover_image
    )
"""
LIST_NAME_MAX_LENGTH = 100
LIST_DESCRIPTION_MAX_LENGTH = 500


def get_user_lists(client, user_id: str) -> Result[list[UserList]]:
    result = safe_query(
        lambda: client.table("lists")
        .select(LIST_COLUMNS)
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute(),
        context="user lists",
    )
    if not result.ok:
        return result
    return Ok(result.value.data or [])


def create_list(
    client,
    user_id: str,
    name: str,
    description: str | None = None,
    is_private: bool = False,
) -> Result[UserList]:
    name = sanitize_input(name, LIST_NAME_MAX_LENGTH)
    if not name:
        return fail(ErrorKind.INVALID_INPUT, "List name cannot be empty", context="create list")
    description = sanitize_input(description or "", LIST_DESCRIPTION_MAX_LENGTH) or None

    result = safe_write(
        lambda: client.table("lists")
        .insert(
            {
                "user_id": user_id,
                "name": name,
                "description": description,
                "is_private": is_private,
            }
        )
        .execute(),
        context="create list",
    )
    if not result.ok:
        return result
    rows = result.value.data or []
    if not rows:
        return fail(ErrorKind.UNKNOWN, "List was not returned by the store", context="create list")
    row = rows[0]
    return Ok({key: row.get(key) for key in LIST_COLUMNS.split(",")})


def add_to_list(client, list_id: str, anime_id: str) -> Result[None]:
    result = safe_write(
        lambda: client.table("list_items").insert({"list_id": list_id, "anime_id": anime_id}).execute(),
        context="add to list",
    )
    return Ok(None) if result.ok else result


def get_list_items(client, list_id: str) -> Result[list[ListItem]]:
    result = safe_query(
        lambda: client.table("list_items").select(LIST_ITEM_COLUMNS).eq("list_id", list_id).execute(),
        context="list items",
    )
    if not result.ok:
        return result

    items = [
        {"id": row["id"], "anime_id": row["anime_id"], "anime": row.get("anime")}
        for row in result.value.data or []
    ]
    return Ok(items)


def delete_list(client, user_id: str, list_id: str) -> Result[None]:
    return delete_owned(client, "lists", list_id, user_id, context="delete list")
