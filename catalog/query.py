"""
Module: query.py
Description:
    Runs Supabase query-builder calls and turns their outcome into a Result.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * QUERY_RETRIES
        * QUERY_RETRY_DELAY
"""

import logging
import os
import time
from pathlib import Path
from typing import Any, Callable

import httpx
from dotenv import load_dotenv
from postgrest.exceptions import APIError
from postgrest.types import CountMethod

from catalog.result import Err, ErrorKind, Ok, Result, error_from_exception

logger = logging.getLogger(__name__)

# === Load .env ===
base_path = Path(__file__).resolve().parent
env_path = base_path.parent / ".env"
load_dotenv(dotenv_path=env_path)

QUERY_RETRIES = int(os.getenv("QUERY_RETRIES", 2))
QUERY_RETRY_DELAY = float(os.getenv("QUERY_RETRY_DELAY", 1.0))


def safe_query(
    execute: Callable[[], Any],
    *,
    context: str,
    retries: int = QUERY_RETRIES,
    delay: float = QUERY_RETRY_DELAY,
) -> Result[Any]:
    """
    Run a read query. Network failures and timeouts are retried up to
    `retries` more times; every other failure is returned immediately.
    """
    for attempt in range(retries + 1):
        try:
            return Ok(execute())
        except (APIError, httpx.HTTPError) as exc:
            error = error_from_exception(exc)

        if not error.kind.transient or attempt == retries:
            break
        logger.info(
            "[retry:%s] %s failed (%s), retrying in %.1fs",
            attempt + 1,
            context,
            error.kind.value,
            delay,
        )
        time.sleep(delay)

    logger.error("%s failed: %s", context, error.message)
    return error


def safe_write(execute: Callable[[], Any], *, context: str) -> Result[Any]:
    """Run a write once; writes are never replayed."""
    return safe_query(execute, context=context, retries=0)


def fail(kind, message: str, *, context: str) -> Err:
    logger.warning("%s rejected: %s", context, message)
    return Err(kind, message)


def delete_owned(client, table: str, row_id: str, user_id: str, *, context: str) -> Result[None]:
    """
    Delete one of the caller's own rows. Row-level security drops rows it
    hides instead of refusing, so an empty delete is reported as NOT_FOUND.
    """
    result = safe_write(
        lambda: client.table(table)
        .delete(count=CountMethod.exact)
        .eq("id", row_id)
        .eq("user_id", user_id)
        .execute(),
        context=context,
    )
    if not result.ok:
        return result
    if not (result.value.count or result.value.data):
        return fail(ErrorKind.NOT_FOUND, "Row not found or already deleted", context=context)
    return Ok(None)
