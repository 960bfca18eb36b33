"""
Module: errors.py
Description:
    Exception types raised by the catalog sync job and its configuration layer.

Usage:
    Imported by other modules; not intended to be executed directly.
"""


class AnimeIndexError(Exception):
    """Base class for every error raised by this project."""


class ConfigurationError(AnimeIndexError):
    """Required connection settings are missing."""


class SourceUnavailable(AnimeIndexError):
    """The AniList endpoint could not be reached or answered with a non-2xx status."""


class SourceProtocolError(AnimeIndexError):
    """AniList answered, but the payload carries GraphQL errors or is malformed."""


class PersistenceError(AnimeIndexError):
    """Supabase rejected a write."""
