"""
Module: supabase_client.py
Description:
    Builds the process-scoped Supabase client handed to the sync job and the data-access functions.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * SUPABASE_URL
        * SUPABASE_SERVICE_ROLE_KEY / SUPABASE_KEY
        * SUPABASE_TIMEOUT
"""

import os

from supabase import Client, ClientOptions, create_client

from utils.env import get_supabase_credentials

SUPABASE_TIMEOUT = int(os.getenv("SUPABASE_TIMEOUT", 10))


def build_client(url: str | None = None, key: str | None = None) -> Client:
    """
    Create a Supabase client. Credentials default to the environment and are
    validated before the client is built, so a bad setup fails without any I/O.
    """
    if not (url and key):
        url, key = get_supabase_credentials()

    options = ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=SUPABASE_TIMEOUT,
    )
    return create_client(url, key, options=options)
