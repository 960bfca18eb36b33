"""
Module: __init__.py
Description:
    AniList → Supabase catalog sync job.

Usage:
    Imported by other modules; not intended to be executed directly.
"""
