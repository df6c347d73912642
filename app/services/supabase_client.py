"""
Supabase Client

Creates the Supabase client used to read synced HouseCall Pro data.
"""

import logging
from typing import Optional

from supabase import create_client, Client

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings) -> Client:
    """Create a Supabase client from settings"""
    if not settings.supabase_url or not settings.supabase_key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY (or SUPABASE_KEY) must be set")

    logger.info(f"[Supabase] Connecting to {settings.supabase_url}")
    return create_client(settings.supabase_url, settings.supabase_key)


# Singleton instance
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create the shared Supabase client"""
    global _client
    if _client is None:
        _client = create_supabase_client(get_settings())
    return _client
