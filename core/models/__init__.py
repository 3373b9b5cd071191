# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# These models define the "contract" between API and clients.
# =============================================================================

from .character import (
    SAMPLE_CHARACTERS,
    Character,
    CharacterBase,
    CharacterCreate,
    CharacterUpdate,
)

__all__ = [
    "SAMPLE_CHARACTERS",
    "Character",
    "CharacterBase",
    "CharacterCreate",
    "CharacterUpdate",
]
