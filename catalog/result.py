"""
Module: result.py
Description:
    Tagged success/failure results returned by the data-access layer, and the
    decoding of Supabase client exceptions into an ErrorKind.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Literal, TypeVar, Union

import httpx
from postgrest.exceptions import APIError

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    CONFLICT = "conflict"
    INVALID_INPUT = "invalid_input"
    NETWORK = "network"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"

    @property
    def transient(self) -> bool:
        return self in (ErrorKind.NETWORK, ErrorKind.TIMEOUT)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T
    ok: Literal[True] = True


@dataclass(frozen=True, slots=True)
class Err:
    kind: ErrorKind
    message: str = ""
    ok: Literal[False] = False


Result = Union[Ok[T], Err]

# PostgREST / Postgres error codes worth telling apart.
_CODE_KINDS = {
    "PGRST116": ErrorKind.NOT_FOUND,
    "42501": ErrorKind.PERMISSION_DENIED,
    "PGRST301": ErrorKind.PERMISSION_DENIED,
    "PGRST302": ErrorKind.PERMISSION_DENIED,
    "23505": ErrorKind.CONFLICT,
    "23502": ErrorKind.INVALID_INPUT,
    "23503": ErrorKind.INVALID_INPUT,
    "23514": ErrorKind.INVALID_INPUT,
    "22P02": ErrorKind.INVALID_INPUT,
}


def error_from_exception(exc: Exception) -> Err:
    """Decode a client exception into an :class:`Err`."""

    if isinstance(exc, APIError):
        kind = _CODE_KINDS.get(str(exc.code or ""), ErrorKind.UNKNOWN)
        return Err(kind, exc.message or "Supabase request failed")
    if isinstance(exc, httpx.TimeoutException):
        return Err(ErrorKind.TIMEOUT, "Request timed out")
    if isinstance(exc, httpx.HTTPError):
        return Err(ErrorKind.NETWORK, str(exc) or exc.__class__.__name__)
    return Err(ErrorKind.UNKNOWN, str(exc))
