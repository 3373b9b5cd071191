# =============================================================================
# lib/character_store.py - Character Persistence Backends
# =============================================================================
# The store owns character identity: callers never choose ids.
#
# Backends:
# - InMemoryCharacterStore: process-local, lock-guarded, for development/tests
# - SupabaseCharacterStore: "characters" table with an identity id column
#
# Not-found is signalled by return value (None / False), never by raising.
# Backend failures raise StoreUnavailableError.
#
# Usage:
#   store = InMemoryCharacterStore()
#   goku = store.insert({"name": "Goku", ...})
#   store.get(goku.id)
# =============================================================================

from __future__ import annotations

import logging
import threading
from typing import Any, Protocol

from core.models.character import Character
from lib.supabase_client import SupabaseClient
from lib.utils import StoreUnavailableError

logger = logging.getLogger(__name__)


class CharacterStore(Protocol):
    """Persistence contract shared by every backend."""

    def list(self) -> list[Character]:
        """All characters in insertion order."""
        ...

    def get(self, character_id: int) -> Character | None:
        ...

    def insert(self, candidate: dict[str, Any]) -> Character:
        """Store a new character and return it with its assigned id."""
        ...

    def replace(self, character_id: int, character: Character) -> Character | None:
        """Swap in a full replacement record. None if the id is absent."""
        ...

    def delete(self, character_id: int) -> bool:
        ...

    def ping(self) -> None:
        """Raise StoreUnavailableError if the backend cannot be reached."""
        ...


# =============================================================================
# In-Memory Backend
# =============================================================================

class InMemoryCharacterStore:
    """
    Ordered, lock-guarded character store.

    Every read and write happens under one lock, so an update swaps the
    whole record at once and concurrent inserts cannot race on id
    assignment. Ids come from a counter that only moves forward: deleting
    the newest character does not free its id.
    """

    def __init__(self, characters: list[Character] | None = None):
        self._lock = threading.Lock()
        self._characters: dict[int, Character] = {}
        for character in characters or []:
            self._characters[character.id] = character
        self._next_id = max(self._characters, default=0) + 1

    def list(self) -> list[Character]:
        with self._lock:
            return list(self._characters.values())

    def get(self, character_id: int) -> Character | None:
        with self._lock:
            return self._characters.get(character_id)

    def insert(self, candidate: dict[str, Any]) -> Character:
        with self._lock:
            character = Character(id=self._next_id, **candidate)
            self._characters[character.id] = character
            self._next_id += 1
        logger.debug(f"Inserted character {character.id} ({character.name})")
        return character

    def replace(self, character_id: int, character: Character) -> Character | None:
        if character.id != character_id:
            character = character.model_copy(update={"id": character_id})
        with self._lock:
            if character_id not in self._characters:
                return None
            # Re-assigning an existing key keeps its insertion position
            self._characters[character_id] = character
        return character

    def delete(self, character_id: int) -> bool:
        with self._lock:
            return self._characters.pop(character_id, None) is not None

    def ping(self) -> None:
        return None


# =============================================================================
# Supabase Backend
# =============================================================================

class SupabaseCharacterStore:
    """
    Character store backed by a Supabase (PostgreSQL) table.

    Expected schema:
        create table characters (
            id bigint generated always as identity primary key,
            name text not null,
            race text not null,
            planet text not null,
            transformation text not null,
            technique text not null,
            image_url text
        );

    The identity column assigns ids, so concurrent inserts never collide.
    """

    def __init__(self, table: str = "characters"):
        self.table = table

    def _query(self):
        try:
            return SupabaseClient.get_client().table(self.table)
        except Exception as e:
            logger.error(f"Supabase client unavailable: {e}")
            raise StoreUnavailableError(f"Failed to connect to character store: {e}")

    def list(self) -> list[Character]:
        query = self._query()
        try:
            response = query.select("*").order("id").execute()
        except Exception as e:
            logger.error(f"Failed to list characters: {e}")
            raise StoreUnavailableError(f"Failed to list characters: {e}")
        return [Character.from_row(row) for row in response.data or []]

    def get(self, character_id: int) -> Character | None:
        query = self._query()
        try:
            response = (
                query.select("*")
                .eq("id", character_id)
                .single()
                .execute()
            )
        except Exception as e:
            if "PGRST116" in str(e):  # PostgREST code for no rows
                return None
            logger.error(f"Failed to fetch character {character_id}: {e}")
            raise StoreUnavailableError(
                f"Failed to fetch character: {e}",
                details={"character_id": character_id},
            )
        return Character.from_row(response.data) if response.data else None

    def insert(self, candidate: dict[str, Any]) -> Character:
        query = self._query()
        try:
            response = query.insert(candidate).execute()
        except Exception as e:
            logger.error(f"Failed to insert character: {e}")
            raise StoreUnavailableError(f"Failed to insert character: {e}")
        if not response.data:
            raise StoreUnavailableError("Insert returned no data")
        return Character.from_row(response.data[0])

    def replace(self, character_id: int, character: Character) -> Character | None:
        query = self._query()
        try:
            response = (
                query.update(character.to_row())
                .eq("id", character_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update character {character_id}: {e}")
            raise StoreUnavailableError(
                f"Failed to update character: {e}",
                details={"character_id": character_id},
            )
        if not response.data:
            return None
        return Character.from_row(response.data[0])

    def delete(self, character_id: int) -> bool:
        query = self._query()
        try:
            response = query.delete().eq("id", character_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete character {character_id}: {e}")
            raise StoreUnavailableError(
                f"Failed to delete character: {e}",
                details={"character_id": character_id},
            )
        return bool(response.data)

    def ping(self) -> None:
        query = self._query()
        try:
            query.select("id").limit(1).execute()
        except Exception as e:
            raise StoreUnavailableError(f"Character store unreachable: {e}")


def seed_store(store: CharacterStore, samples: list[dict[str, Any]]) -> int:
    """
    Insert sample characters into an empty store.

    Returns:
        Number of characters inserted (0 if the store already had data)
    """
    if store.list():
        return 0
    for sample in samples:
        store.insert({**sample, "image_url": None})
    logger.info(f"Seeded character store with {len(samples)} sample characters")
    return len(samples)
