# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health and liveness endpoints
# - characters.py: Character CRUD and image upload endpoints
# - settings.py: Public configuration endpoint
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import characters
from . import settings

__all__ = [
    "health",
    "characters",
    "settings",
]
