# =============================================================================
# core/models/character.py - Character Schemas
# =============================================================================
# These models define the API contract for character operations:
# - CharacterCreate: Input for POST /api/characters
# - CharacterUpdate: Input for PUT /api/characters/{id}
# - Character: The stored catalog entity returned to clients
#
# JSON uses camelCase for the image field ("imageUrl"); Python code and the
# database use snake_case ("image_url"). Both spellings are accepted on input.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CharacterBase(BaseModel):
    """
    Display fields shared by every character schema.

    Every field is a required, non-empty string. Surrounding whitespace is
    stripped before validation, so "   " is rejected as empty.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Character name (also used to locate the image)",
    )

    race: str = Field(..., min_length=1, max_length=100)

    planet: str = Field(..., min_length=1, max_length=100)

    transformation: str = Field(..., min_length=1, max_length=100)

    technique: str = Field(..., min_length=1, max_length=100)


class CharacterCreate(CharacterBase):
    """
    Schema for creating a character.

    When image_url is omitted the service resolves one from the character
    name.

    Example:
        {
            "name": "Goku",
            "race": "Saiyan",
            "planet": "Earth",
            "transformation": "Ultra Instinct",
            "technique": "Kamehameha"
        }
    """

    image_url: str | None = Field(
        default=None,
        alias="imageUrl",
        max_length=2048,
        description="Explicit image URL; resolved from the name when omitted",
    )

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Goku",
                "race": "Saiyan",
                "planet": "Earth",
                "transformation": "Ultra Instinct",
                "technique": "Kamehameha",
            }
        },
    )


class CharacterUpdate(CharacterCreate):
    """Schema for replacing a character. Same shape and rules as create."""


class Character(CharacterBase):
    """
    A stored catalog character.

    Frozen: an update produces a new Character via model_copy(), so a
    record handed to one reader is never mutated under it.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        frozen=True,
    )

    id: int = Field(..., ge=1, description="Store-assigned identifier")

    image_url: str | None = Field(
        default=None,
        alias="imageUrl",
        description="Resolved image URL, null when none could be resolved",
    )

    # -------------------------------------------------------------------------
    # Database row mapping
    # -------------------------------------------------------------------------

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Character":
        """Build a Character from a snake_case database row."""
        return cls(
            id=row["id"],
            name=row["name"],
            race=row["race"],
            planet=row["planet"],
            transformation=row["transformation"],
            technique=row["technique"],
            image_url=row.get("image_url"),
        )

    def to_row(self) -> dict[str, Any]:
        """Columns written on insert/update. The id is owned by the database."""
        return self.model_dump(exclude={"id"})


# Sample characters inserted into an empty store at startup
SAMPLE_CHARACTERS: list[dict[str, str]] = [
    {"name": "Goku", "race": "Saiyan", "planet": "Earth",
     "transformation": "Ultra Instinct", "technique": "Kamehameha"},
    {"name": "Vegeta", "race": "Saiyan", "planet": "Vegeta",
     "transformation": "Super Saiyan Blue Evolution", "technique": "Final Flash"},
    {"name": "Piccolo", "race": "Namekian", "planet": "Namek",
     "transformation": "Orange Piccolo", "technique": "Special Beam Cannon"},
    {"name": "Gohan", "race": "Half-Saiyan", "planet": "Earth",
     "transformation": "Beast", "technique": "Masenko"},
    {"name": "Frieza", "race": "Frost Demon", "planet": "Unknown",
     "transformation": "Black Frieza", "technique": "Death Ball"},
]
