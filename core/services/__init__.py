# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .character_service import CharacterService
from .configuration_service import ConfigurationService
from .image_service import (
    ImageResolver,
    LocalImageResolver,
    SupabaseImageResolver,
    image_object_path,
)

__all__ = [
    "CharacterService",
    "ConfigurationService",
    "ImageResolver",
    "LocalImageResolver",
    "SupabaseImageResolver",
    "image_object_path",
]
