"""
Module: env.py
Description:
    Environment helpers shared by the sync job and the CLI.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * SUPABASE_URL
        * SUPABASE_SERVICE_ROLE_KEY (preferred) or SUPABASE_KEY
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console

from utils.errors import ConfigurationError

console = Console()

# === Load .env ===
base_path = Path(__file__).resolve().parent
env_path = base_path.parent / ".env"
load_dotenv(dotenv_path=env_path)


def validate_env_vars(required_vars):
    """Ensure all required environment variables are set."""
    missing = [var for var in required_vars if not os.getenv(var)]
    if missing:
        console.print(
            f"[bold red]❌ Missing required environment variables: {', '.join(missing)}[/bold red]"
        )
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")


def get_supabase_credentials() -> tuple[str, str]:
    """
    Return the Supabase URL and the key to use with it.
    The service role key wins over the public key when both are set.
    """
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_KEY")

    missing = []
    if not url:
        missing.append("SUPABASE_URL")
    if not key:
        missing.append("SUPABASE_KEY")
    if missing:
        validate_env_vars(missing)

    return url, key
