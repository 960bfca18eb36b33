"""
Module: catalog
Description:
    Data-access functions over the Supabase tables used by the anime app.
    Every function takes the Supabase client as its first argument and returns
    an Ok or an Err from `catalog.result`.

Usage:
    from catalog.anime import get_trending_anime
"""

from catalog.result import Err, ErrorKind, Ok, Result

__all__ = ["Err", "ErrorKind", "Ok", "Result"]
