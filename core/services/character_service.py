# =============================================================================
# core/services/character_service.py - Character Business Logic
# =============================================================================
# Orchestrates the character store and the image resolver to implement
# create / read / update / delete.
#
# Failure policy:
# - Store failures (StoreUnavailableError) propagate to the caller.
# - Image resolution failures degrade to image_url=None and are logged.
# - Image cleanup after a delete runs in the background; its outcome is
#   only visible in the logs.
# =============================================================================

import logging
from typing import Any, Callable

from app.exceptions import CharacterNotFoundError
from core.models.character import (
    Character,
    CharacterCreate,
    CharacterUpdate,
)
from core.services.image_service import ImageResolver
from lib.character_store import CharacterStore

logger = logging.getLogger(__name__)

# Background dispatcher: called as schedule(func, *args) and returns
# without waiting for func. FastAPI's BackgroundTasks.add_task fits.
Scheduler = Callable[..., Any]


class CharacterService:
    """
    Service for character catalog operations.

    Provides a clean interface between API routes and the store.
    One instance is built at startup and shared by every request.
    """

    def __init__(self, store: CharacterStore, images: ImageResolver):
        self.store = store
        self.images = images

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_characters(self) -> list[Character]:
        """Return every character in store order."""
        return self.store.list()

    def get_character(self, character_id: int) -> Character:
        """
        Get a character by ID.

        Raises:
            CharacterNotFoundError: If the character doesn't exist
        """
        character = self.store.get(character_id)
        if character is None:
            raise CharacterNotFoundError(character_id)
        return character

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_character(self, request: CharacterCreate) -> Character:
        """
        Create a new character.

        The image URL is always resolved from the name; any image_url on
        the request is ignored. An unresolvable image leaves it as None.

        Returns:
            The stored character with its assigned id
        """
        image_url = self._resolve_image_url(request.name)
        candidate = {
            **request.model_dump(exclude={"image_url"}),
            "image_url": image_url,
        }

        character = self.store.insert(candidate)
        logger.info(f"Created character: {character.id} ({character.name})")
        return character

    def update_character(self, character_id: int, request: CharacterUpdate) -> Character:
        """
        Replace every mutable field of a character.

        The current record is read, a full replacement is built, and the
        store swaps it in as a single write.

        Raises:
            CharacterNotFoundError: If the character doesn't exist
        """
        current = self.get_character(character_id)

        image_url = request.image_url or self._resolve_image_url(request.name)
        replacement = current.model_copy(update={
            **request.model_dump(exclude={"image_url"}),
            "image_url": image_url,
        })

        updated = self.store.replace(character_id, replacement)
        if updated is None:
            # Deleted between the read and the write
            raise CharacterNotFoundError(character_id)

        logger.info(f"Updated character: {character_id}")
        return updated

    def delete_character(self, character_id: int, schedule: Scheduler) -> None:
        """
        Delete a character, then clean up its image in the background.

        Nothing is scheduled when the character doesn't exist.

        Args:
            character_id: Character to delete
            schedule: Background dispatcher for the image cleanup

        Raises:
            CharacterNotFoundError: If the character doesn't exist
        """
        character = self.get_character(character_id)

        if not self.store.delete(character_id):
            raise CharacterNotFoundError(character_id)

        logger.info(f"Deleted character: {character_id} ({character.name})")
        schedule(self._discard_image, character.name)

    def upload_image(
        self,
        character_id: int,
        content: bytes,
        content_type: str = "image/jpeg",
    ) -> Character:
        """
        Store a new image for a character and record its URL.

        Raises:
            CharacterNotFoundError: If the character doesn't exist
            ImageUploadError: If the image backend rejects the upload
        """
        current = self.get_character(character_id)

        image_url = self.images.upload(current.name, content, content_type)

        updated = self.store.replace(
            character_id,
            current.model_copy(update={"image_url": image_url}),
        )
        if updated is None:
            raise CharacterNotFoundError(character_id)

        logger.info(f"Uploaded image for character: {character_id}")
        return updated

    # -------------------------------------------------------------------------
    # Image helpers
    # -------------------------------------------------------------------------

    def _resolve_image_url(self, name: str) -> str | None:
        """Best-effort image lookup. Never raises."""
        try:
            image_url = self.images.resolve_url(name)
        except Exception as e:
            logger.warning(f"Image resolution failed for {name}: {e}")
            return None

        if image_url is None:
            logger.warning(f"No image URL resolved for {name}")
        return image_url

    def _discard_image(self, name: str) -> None:
        """Background image cleanup. Failures are logged, never raised."""
        try:
            deleted = self.images.delete(name)
        except Exception as e:
            logger.warning(f"Failed to clean up image for character {name}: {e}")
            return

        if not deleted:
            logger.warning(f"Failed to clean up image for character {name}")
