# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains infrastructure used by the services:
# - supabase_client.py: Shared Supabase client with bounded timeouts
# - character_store.py: In-memory and Supabase character stores
# - api_client.py: HTTP client for the catalog API
# - utils.py: Shared utilities (error base class, name normalization)
# =============================================================================

from lib.utils import ApplicationError, StoreUnavailableError, normalize_image_key

__all__ = [
    "ApplicationError",
    "StoreUnavailableError",
    "normalize_image_key",
]
