# =============================================================================
# core/services/image_service.py - Character Image Resolution
# =============================================================================
# Resolves, uploads and deletes character images. Images are keyed by the
# normalized character name: "Master Roshi" -> masterroshi/masterroshi.jpg
#
# Backends:
# - SupabaseImageResolver: Supabase Storage bucket
# - LocalImageResolver: directory on disk, served by the API at /images
#
# resolve_url() never raises: an unreachable backend yields None.
# delete() never raises: failure yields False.
# upload() raises ImageUploadError, since the caller asked for it explicitly.
# =============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from app.exceptions import ImageUploadError
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_image_key

logger = logging.getLogger(__name__)

IMAGE_EXTENSION = "jpg"


def image_object_path(name: str) -> str:
    """Storage location for a character's image."""
    key = normalize_image_key(name)
    return f"{key}/{key}.{IMAGE_EXTENSION}"


class ImageResolver(Protocol):
    """Contract shared by every image backend."""

    def resolve_url(self, name: str) -> str | None:
        ...

    def upload(self, name: str, content: bytes, content_type: str = "image/jpeg") -> str:
        ...

    def delete(self, name: str) -> bool:
        ...


# =============================================================================
# Supabase Storage Backend
# =============================================================================

class SupabaseImageResolver:
    """
    Image resolver backed by a Supabase Storage bucket.

    Timeouts come from the shared client (IMAGE_TIMEOUT_SECONDS); a
    timeout surfaces as an exception and is handled like any other
    unreachable-backend failure.
    """

    def __init__(self, bucket: str = "characters"):
        self.bucket = bucket

    def _bucket(self):
        return SupabaseClient.get_client().storage.from_(self.bucket)

    def resolve_url(self, name: str) -> str | None:
        """
        Get the public URL for a character's image.

        If the object does not exist yet the URL is still returned as a
        placeholder, so an image uploaded later shows up without touching
        the character record.

        Returns:
            Public URL, or None if storage could not be reached
        """
        path = image_object_path(name)
        folder, filename = path.split("/", 1)
        logger.info(f"Getting image URL for character {name} with path {path}")

        try:
            bucket = self._bucket()
            listing = bucket.list(folder, {"search": filename})
            if not any(item.get("name") == filename for item in listing or []):
                logger.warning(f"Image not found for character {name}, returning placeholder")
            return bucket.get_public_url(path)

        except Exception as e:
            logger.warning(f"Image storage unavailable for character {name}: {e}")
            return None

    def upload(self, name: str, content: bytes, content_type: str = "image/jpeg") -> str:
        """
        Upload image bytes for a character.

        Returns:
            Public URL of the stored image

        Raises:
            ImageUploadError: If the upload fails
        """
        path = image_object_path(name)
        logger.info(f"Uploading image for character {name} to {path}")

        try:
            bucket = self._bucket()
            bucket.upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "true"},
            )
            return bucket.get_public_url(path)

        except Exception as e:
            logger.error(f"Image upload failed for character {name}: {e}")
            raise ImageUploadError(str(e))

    def delete(self, name: str) -> bool:
        path = image_object_path(name)
        logger.info(f"Deleting image for character {name} at {path}")

        try:
            self._bucket().remove([path])
            return True

        except Exception as e:
            logger.error(f"Failed to delete image for character {name}: {e}")
            return False


# =============================================================================
# Local Directory Backend
# =============================================================================

class LocalImageResolver:
    """
    Image resolver backed by a local directory.

    URLs are built from base_url, which should point at wherever the
    directory is served (the API mounts it at /images).
    """

    def __init__(self, root: Path | str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _file(self, name: str) -> Path:
        return self.root / image_object_path(name)

    def resolve_url(self, name: str) -> str | None:
        path = image_object_path(name)
        try:
            if not self._file(name).is_file():
                logger.warning(f"Image not found for character {name}, returning placeholder")
        except OSError as e:
            logger.warning(f"Image directory unavailable for character {name}: {e}")
            return None
        return f"{self.base_url}/{path}"

    def upload(self, name: str, content: bytes, content_type: str = "image/jpeg") -> str:
        target = self._file(name)
        logger.info(f"Uploading image for character {name} to {target}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            logger.error(f"Image upload failed for character {name}: {e}")
            raise ImageUploadError(str(e))

        return f"{self.base_url}/{image_object_path(name)}"

    def delete(self, name: str) -> bool:
        target = self._file(name)
        logger.info(f"Deleting image for character {name} at {target}")

        try:
            target.unlink()
            # Drop the per-character folder once it is empty
            if not any(target.parent.iterdir()):
                target.parent.rmdir()
        except FileNotFoundError:
            logger.warning(f"No image to delete for character {name}")
            return False
        except OSError as e:
            logger.error(f"Failed to delete image for character {name}: {e}")
            return False

        return True
